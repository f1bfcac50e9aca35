"""Task box: unscheduled tasks that can later be given a date.

Unlike most resources, the task box expects a JSON:API envelope
``{"data": {"type": "task_box_item", "attributes": {...}}}``.
"""

from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..models import TaskBoxItem, parse_resource, parse_resources

TASK_BOX_PATH = "/api/frames/{frame_id}/task_box/items"

_UPDATABLE = ("summary", "emoji_icon", "routine", "reward_points")


def _envelope(attributes: Dict[str, Any]) -> Dict[str, Any]:
    return {"data": {"type": "task_box_item", "attributes": attributes}}


async def create_task_box_item(
    client: SkylightClient,
    summary: str,
    emoji_icon: Optional[str] = None,
    routine: bool = False,
    reward_points: Optional[float] = None,
) -> TaskBoxItem:
    body = _envelope(
        {
            "summary": summary,
            "emoji_icon": emoji_icon,
            "routine": routine,
            "reward_points": reward_points,
        }
    )
    payload = await client.post(TASK_BOX_PATH, body)
    return parse_resource(TaskBoxItem, payload)


async def get_task_box_items(client: SkylightClient) -> List[TaskBoxItem]:
    payload = await client.get(TASK_BOX_PATH)
    return parse_resources(TaskBoxItem, payload)


async def update_task_box_item(
    client: SkylightClient, item_id: str, changes: Dict[str, Any]
) -> TaskBoxItem:
    attributes = {key: changes[key] for key in _UPDATABLE if key in changes}
    payload = await client.put(f"{TASK_BOX_PATH}/{item_id}", _envelope(attributes))
    return parse_resource(TaskBoxItem, payload)


async def delete_task_box_item(client: SkylightClient, item_id: str) -> None:
    await client.delete(f"{TASK_BOX_PATH}/{item_id}")
