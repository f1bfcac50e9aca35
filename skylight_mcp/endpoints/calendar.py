from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..dates import add_days
from ..models import Resource, parse_resource, parse_resources

EVENTS_PATH = "/api/frames/{frame_id}/calendar_events"


async def get_calendar_events(
    client: SkylightClient,
    date_min: str,
    date_max: str,
    timezone: Optional[str] = None,
    include: Optional[str] = None,
) -> List[Resource]:
    """Events between two dates, both inclusive.

    The API treats ``date_max`` as exclusive, so one day is added to it.
    """
    payload = await client.get(
        EVENTS_PATH,
        {
            "date_min": date_min,
            "date_max": add_days(date_max, 1),
            "timezone": timezone or client.timezone,
            "include": include,
        },
    )
    return parse_resources(Resource, payload)


async def get_source_calendars(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/source_calendars")
    return parse_resources(Resource, payload)


async def create_calendar_event(client: SkylightClient, event: Dict[str, Any]) -> Resource:
    payload = await client.post(EVENTS_PATH, event)
    return parse_resource(Resource, payload)


async def update_calendar_event(
    client: SkylightClient, event_id: str, updates: Dict[str, Any]
) -> Resource:
    payload = await client.put(f"{EVENTS_PATH}/{event_id}", updates)
    return parse_resource(Resource, payload)


async def delete_calendar_event(client: SkylightClient, event_id: str) -> None:
    await client.delete(f"{EVENTS_PATH}/{event_id}")
