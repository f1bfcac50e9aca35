from mcp.server.fastmcp import FastMCP

from ..client import SkylightClient
from ..endpoints import misc as misc_api
from . import READ_ONLY, format_resource_list, tool_error


def register_misc_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_avatars", annotations={"title": "Get Avatars", **READ_ONLY})
    async def get_avatars() -> str:
        """Get the avatar options available for family member profiles.

        Use this when setting up a new profile or changing someone's picture.
        """
        try:
            avatars = await misc_api.get_avatars(client)
            if not avatars:
                return "No avatars found."
            return format_resource_list("Available avatars", avatars, "Avatar")
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_colors", annotations={"title": "Get Colors", **READ_ONLY})
    async def get_colors() -> str:
        """Get the color options for profiles and lists, with their hex values."""
        try:
            colors = await misc_api.get_colors(client)
            if not colors:
                return "No colors found."
            return format_resource_list("Available colors", colors, "Color")
        except Exception as e:
            raise tool_error(e) from e
