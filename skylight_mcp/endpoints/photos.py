from typing import List

from ..client import SkylightClient
from ..models import Resource, parse_resources


async def get_albums(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/albums")
    return parse_resources(Resource, payload)
