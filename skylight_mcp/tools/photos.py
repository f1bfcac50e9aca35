from mcp.server.fastmcp import FastMCP

from ..client import SkylightClient
from ..endpoints.photos import get_albums as fetch_albums
from . import READ_ONLY, format_resource_list, tool_error


def register_photo_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_albums", annotations={"title": "Get Photo Albums", **READ_ONLY})
    async def get_albums() -> str:
        """List the photo albums shown on the Skylight frame."""
        try:
            albums = await fetch_albums(client)
            if not albums:
                return "No photo albums found."
            return format_resource_list("Photo albums", albums, "Album")
        except Exception as e:
            raise tool_error(e) from e
