import json

from mcp.server.fastmcp import FastMCP

from ..client import SkylightClient
from ..endpoints import categories as categories_api
from ..endpoints.devices import get_devices as fetch_devices
from ..endpoints.frames import get_frame
from ..models import Category
from . import READ_ONLY, format_resource_list, tool_error


def _format_category(category: Category, show_picture: bool) -> str:
    attrs = category.attributes
    lines = [f"- {attrs.label or 'Unnamed'} (ID: {category.id})"]
    if attrs.color:
        lines.append(f"  Color: {attrs.color}")
    if show_picture and attrs.profile_pic_url:
        lines.append("  Has profile picture: Yes")
    if attrs.selected_for_chore_chart:
        lines.append("  On chore chart: Yes")
    return "\n".join(lines)


def register_family_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_family_members", annotations={"title": "Get Family Members", **READ_ONLY})
    async def get_family_members() -> str:
        """Get family members (profiles) from Skylight.

        Shows who can be assigned chores, events and rewards. Use this to
        answer "Who's in our family on Skylight?" or "Who can I assign chores
        to?". When no profiles are linked, all categories are listed instead.
        """
        try:
            members = await categories_api.get_family_members(client)
            if members:
                return "Family members:\n\n" + "\n\n".join(
                    _format_category(m, show_picture=True) for m in members
                )
            categories = await categories_api.get_categories(client)
            if not categories:
                return "No family members or categories found in Skylight."
            return "Categories (no linked profiles found):\n\n" + "\n\n".join(
                _format_category(c, show_picture=False) for c in categories
            )
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_frame_info", annotations={"title": "Get Household Info", **READ_ONLY})
    async def get_frame_info() -> str:
        """Get Skylight household (frame) information.

        Useful for setup verification. Answers "What's my frame ID?" and
        whether the account has a Plus subscription.
        """
        try:
            frame = await get_frame(client)
            lines = [f"Frame ID: {frame.id}", f"Type: {frame.type}"]
            if client.subscription_status:
                plus = "Yes" if client.has_plus() else "No"
                lines.append(f"Subscription: {client.subscription_status} (Plus features: {plus})")

            attributes = [(key, value) for key, value in frame.attribute_items() if value is not None]
            if attributes:
                lines.append("\nAttributes:")
                lines.extend(f"  {key}: {json.dumps(value)}" for key, value in attributes)
            return "\n".join(lines)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_devices", annotations={"title": "Get Devices", **READ_ONLY})
    async def get_devices() -> str:
        """List the Skylight devices (frames, calendars) in the household."""
        try:
            devices = await fetch_devices(client)
            if not devices:
                return "No Skylight devices found."
            return format_resource_list("Skylight devices", devices, "Device")
        except Exception as e:
            raise tool_error(e) from e
