from ..client import SkylightClient
from ..models import Resource, parse_resource


async def get_frame(client: SkylightClient) -> Resource:
    payload = await client.get("/api/frames/{frame_id}")
    return parse_resource(Resource, payload)
