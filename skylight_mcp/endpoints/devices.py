from typing import List

from ..client import SkylightClient
from ..models import Resource, parse_resources


async def get_devices(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/devices")
    return parse_resources(Resource, payload)
