from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..models import ListItem, SkylightList, parse_included, parse_resource, parse_resources

LISTS_PATH = "/api/frames/{frame_id}/lists"


@dataclass
class ListWithItems:
    skylight_list: SkylightList
    items: List[ListItem]
    sections: List[Any] = field(default_factory=list)


async def get_lists(client: SkylightClient) -> List[SkylightList]:
    payload = await client.get(LISTS_PATH)
    return parse_resources(SkylightList, payload)


async def get_list_with_items(client: SkylightClient, list_id: str) -> ListWithItems:
    payload = await client.get(f"{LISTS_PATH}/{list_id}")
    meta = payload.get("meta") if isinstance(payload, dict) else None
    return ListWithItems(
        skylight_list=parse_resource(SkylightList, payload),
        items=parse_included(ListItem, payload),
        sections=list((meta or {}).get("sections") or []),
    )


async def find_list_by_name(client: SkylightClient, name: str) -> Optional[SkylightList]:
    """First list whose label contains ``name``, case-insensitively."""
    needle = name.lower()
    for skylight_list in await get_lists(client):
        if needle in (skylight_list.attributes.label or "").lower():
            return skylight_list
    return None


async def find_list_by_type(
    client: SkylightClient, kind: str, prefer_default: bool = True
) -> Optional[SkylightList]:
    """First list of the given kind; for shopping lists the default grocery list wins."""
    matching = [lst for lst in await get_lists(client) if lst.attributes.kind == kind]
    if prefer_default and kind == "shopping":
        for lst in matching:
            if lst.attributes.default_grocery_list:
                return lst
    return matching[0] if matching else None


async def create_list(
    client: SkylightClient, label: str, kind: str, color: Optional[str] = None
) -> SkylightList:
    body: Dict[str, Any] = {"label": label, "kind": kind}
    if color is not None:
        body["color"] = color
    payload = await client.post(LISTS_PATH, body)
    return parse_resource(SkylightList, payload)


async def update_list(
    client: SkylightClient, list_id: str, changes: Dict[str, Any]
) -> SkylightList:
    payload = await client.put(f"{LISTS_PATH}/{list_id}", changes)
    return parse_resource(SkylightList, payload)


async def delete_list(client: SkylightClient, list_id: str) -> None:
    await client.delete(f"{LISTS_PATH}/{list_id}")


async def create_list_item(
    client: SkylightClient, list_id: str, label: str, section: Optional[str] = None
) -> ListItem:
    body: Dict[str, Any] = {"label": label}
    if section is not None:
        body["section"] = section
    payload = await client.post(f"{LISTS_PATH}/{list_id}/list_items", body)
    return parse_resource(ListItem, payload)


async def update_list_item(
    client: SkylightClient, list_id: str, item_id: str, changes: Dict[str, Any]
) -> ListItem:
    payload = await client.put(f"{LISTS_PATH}/{list_id}/list_items/{item_id}", changes)
    return parse_resource(ListItem, payload)


async def delete_list_item(client: SkylightClient, list_id: str, item_id: str) -> None:
    await client.delete(f"{LISTS_PATH}/{list_id}/list_items/{item_id}")
