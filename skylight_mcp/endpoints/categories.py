"""Categories are Skylight's family members (and other assignable groups)."""

from typing import List, Optional

from ..client import SkylightClient
from ..models import Category, parse_resources


async def get_categories(client: SkylightClient) -> List[Category]:
    payload = await client.get("/api/frames/{frame_id}/categories")
    return parse_resources(Category, payload)


async def get_family_members(client: SkylightClient) -> List[Category]:
    """Categories linked to a user profile."""
    return [c for c in await get_categories(client) if c.attributes.linked_to_profile]


async def find_category_by_name(client: SkylightClient, name: str) -> Optional[Category]:
    """Exact label match (case-insensitive) first, then the first partial match."""
    needle = name.strip().lower()
    categories = await get_categories(client)
    for category in categories:
        if (category.attributes.label or "").lower() == needle:
            return category
    for category in categories:
        if needle in (category.attributes.label or "").lower():
            return category
    return None
