from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..errors import ParseError
from ..models import Category, Chore, parse_included, parse_resource, parse_resources

CHORES_PATH = "/api/frames/{frame_id}/chores"

# fields copied verbatim from an update request into the flat body
_PLAIN_UPDATE_FIELDS = (
    "summary",
    "start",
    "start_time",
    "status",
    "recurring",
    "reward_points",
    "emoji_icon",
)


@dataclass
class ChoresResult:
    chores: List[Chore]
    categories: List[Category]


async def get_chores(
    client: SkylightClient,
    after: Optional[str] = None,
    before: Optional[str] = None,
    include_late: Optional[bool] = None,
    filter_linked_to_profile: bool = False,
) -> ChoresResult:
    params: Dict[str, Any] = {
        "after": after,
        "before": before,
        "include_late": include_late,
    }
    if filter_linked_to_profile:
        params["filter"] = "linked_to_profile"

    payload = await client.get(CHORES_PATH, params)
    return ChoresResult(
        chores=parse_resources(Chore, payload),
        categories=parse_included(Category, payload, "category"),
    )


async def create_chore(
    client: SkylightClient,
    summary: str,
    start: str,
    start_time: Optional[str] = None,
    status: str = "pending",
    recurring: bool = False,
    recurrence_set: Optional[str] = None,
    category_id: Optional[str] = None,
    reward_points: Optional[float] = None,
    emoji_icon: Optional[str] = None,
) -> Chore:
    """Create one chore.

    There is no single-create endpoint; ``create_multiple`` is used with one
    chore. The body is flat JSON and the category must be set both as
    ``category_id`` and ``category_ids`` or the assignment is ignored.
    """
    body: Dict[str, Any] = {
        "summary": summary,
        "start": start,
        "start_time": start_time,
        "status": status,
        "recurring": recurring,
        "recurrence_set": [recurrence_set] if recurrence_set else None,
        "reward_points": reward_points,
        "emoji_icon": emoji_icon,
    }
    if category_id:
        body["category_id"] = category_id
        body["category_ids"] = [category_id]

    payload = await client.post(f"{CHORES_PATH}/create_multiple", body)
    chores = parse_resources(Chore, payload)
    if not chores:
        raise ParseError("Chore creation returned no chores")
    return chores[0]


async def update_chore(client: SkylightClient, chore_id: str, changes: Dict[str, Any]) -> Chore:
    """Update only the fields present in ``changes`` (API field names).

    A ``None`` value clears the field. Clearing the category sends
    ``category_id: null`` without ``category_ids``.
    """
    body: Dict[str, Any] = {
        key: changes[key] for key in _PLAIN_UPDATE_FIELDS if key in changes
    }
    if "recurrence_set" in changes:
        rule = changes["recurrence_set"]
        body["recurrence_set"] = [rule] if rule else None
    if "category_id" in changes:
        category_id = changes["category_id"]
        body["category_id"] = category_id
        if category_id is not None:
            body["category_ids"] = [category_id]

    payload = await client.put(f"{CHORES_PATH}/{chore_id}", body)
    return parse_resource(Chore, payload)


async def delete_chore(client: SkylightClient, chore_id: str) -> None:
    await client.delete(f"{CHORES_PATH}/{chore_id}")
