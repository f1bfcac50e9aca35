"""Catalog lookups used when styling profiles and lists."""

from typing import List

from ..client import SkylightClient
from ..models import Resource, parse_resources


async def get_avatars(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/avatars")
    return parse_resources(Resource, payload)


async def get_colors(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/colors")
    return parse_resources(Resource, payload)
