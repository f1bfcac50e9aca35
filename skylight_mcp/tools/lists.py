from typing import Dict, List, Literal, Optional, Tuple

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ..client import SkylightClient
from ..endpoints import lists as lists_api
from ..models import ListItem
from . import DELETE, READ_ONLY, UPDATE, WRITE, ToolInput, describe_status, tool_error

ListKind = Literal["shopping", "to_do"]


def _kind_label(kind: Optional[str]) -> str:
    return "shopping" if kind == "shopping" else "to-do"


async def resolve_list(
    client: SkylightClient,
    list_id: Optional[str],
    list_name: Optional[str],
    default_to_grocery: bool = False,
) -> Tuple[str, str]:
    """Return ``(id, display name)`` for the list selected by ID or name.

    Raises ToolError when the name matches nothing, or when neither selector
    is given and there is no grocery list to fall back to.
    """
    if list_id:
        return list_id, list_name or list_id

    if list_name:
        found = await lists_api.find_list_by_name(client, list_name)
        if found is None:
            raise ToolError(f'Could not find a list named "{list_name}". Use get_lists to see available lists.')
        return found.id, found.attributes.label or found.id

    if default_to_grocery:
        found = await lists_api.find_list_by_type(client, "shopping", prefer_default=True)
        if found is None:
            raise ToolError("No default grocery list found. Use get_lists to see available lists.")
        return found.id, found.attributes.label or found.id

    raise ToolError("Either list_id or list_name is required")


class GetListItemsInput(ToolInput):
    """Input for reading a list's items."""

    list_name: Optional[str] = Field(
        default=None,
        description="List name to query (e.g., 'Grocery List'). If omitted, shows the default grocery list.",
    )
    list_type: Optional[ListKind] = Field(
        default=None, description="Type of list to query. Alternative to list_name."
    )
    include_completed: bool = Field(default=False, description="Include checked-off items")


class CreateListInput(ToolInput):
    label: str = Field(..., description="Name of the list (e.g., 'Vacation Packing')", min_length=1)
    kind: ListKind = Field(..., description="Type of list: 'shopping' or 'to_do'")
    color: Optional[str] = Field(default=None, description="Optional color for the list (e.g., '#FF5733')")


class UpdateListInput(ToolInput):
    """Select the list by ID or name; only provided fields change."""

    list_id: Optional[str] = Field(default=None, description="ID of the list to update")
    list_name: Optional[str] = Field(default=None, description="Name of the list to update (alternative to list_id)")
    label: Optional[str] = Field(default=None, description="New name for the list")
    kind: Optional[ListKind] = Field(default=None, description="New type for the list")
    color: Optional[str] = Field(default=None, description="New color for the list, or null to clear")


class DeleteListInput(ToolInput):
    list_id: Optional[str] = Field(default=None, description="ID of the list to delete")
    list_name: Optional[str] = Field(default=None, description="Name of the list to delete (alternative to list_id)")


class CreateListItemInput(ToolInput):
    label: str = Field(..., description="The item text (e.g., 'Milk', 'Call doctor')", min_length=1)
    list_id: Optional[str] = Field(default=None, description="ID of the list to add to")
    list_name: Optional[str] = Field(default=None, description="Name of the list (e.g., 'Grocery List', 'To-Do')")
    section: Optional[str] = Field(default=None, description="Section within the list (e.g., 'Dairy', 'Produce')")


class UpdateListItemInput(ToolInput):
    item_id: str = Field(..., description="ID of the item to update", min_length=1)
    list_id: str = Field(..., description="ID of the list containing the item", min_length=1)
    label: Optional[str] = Field(default=None, description="New text for the item")
    status: Optional[Literal["pending", "completed"]] = Field(
        default=None, description="'completed' to check off, 'pending' to uncheck"
    )
    section: Optional[str] = Field(default=None, description="Move to a different section (null to remove from section)")


class DeleteListItemInput(ToolInput):
    item_id: str = Field(..., description="ID of the item to delete", min_length=1)
    list_id: str = Field(..., description="ID of the list containing the item", min_length=1)


def _checkbox(item: ListItem) -> str:
    mark = "[x]" if item.attributes.status == "completed" else "[ ]"
    return f"{mark} {item.attributes.label}"


def _render_items(title: str, items: List[ListItem]) -> str:
    """Unsectioned items first, then one block per section in first-seen order."""
    unsectioned: List[ListItem] = []
    sections: Dict[str, List[ListItem]] = {}
    for item in items:
        if item.attributes.section:
            sections.setdefault(item.attributes.section, []).append(item)
        else:
            unsectioned.append(item)

    lines = [f"{title}:"]
    lines.extend(_checkbox(item) for item in unsectioned)
    for name, section_items in sections.items():
        lines.append(f"\n{name}:")
        lines.extend(_checkbox(item) for item in section_items)
    return "\n".join(lines)


def register_list_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_lists", annotations={"title": "Get Lists", **READ_ONLY})
    async def get_lists() -> str:
        """Get all lists from Skylight (grocery lists, to-do lists, etc.).

        Use this to see what lists are available before adding items.
        Returns list names, types and item counts.
        """
        try:
            lists = await lists_api.get_lists(client)
            if not lists:
                return "No lists found in Skylight."

            blocks = []
            for skylight_list in lists:
                attrs = skylight_list.attributes
                lines = [
                    f"- {attrs.label} (ID: {skylight_list.id})",
                    f"  Type: {'Shopping list' if attrs.kind == 'shopping' else 'To-do list'}",
                    f"  Items: {skylight_list.item_count}",
                ]
                if attrs.default_grocery_list:
                    lines.append("  (Default grocery list)")
                blocks.append("\n".join(lines))
            return "Available lists:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_list_items", annotations={"title": "Get List Items", **READ_ONLY})
    async def get_list_items(params: GetListItemsInput) -> str:
        """Get items from a Skylight list.

        Use this to answer "What's on the grocery list?" or "Show me my to-do
        list". Items are grouped by section. Without a name or type the
        default grocery list is shown.
        """
        try:
            if params.list_name:
                found = await lists_api.find_list_by_name(client, params.list_name)
                if found is None:
                    raise ToolError(
                        f'Could not find a list named "{params.list_name}". Use get_lists to see available lists.'
                    )
            elif params.list_type:
                found = await lists_api.find_list_by_type(client, params.list_type)
                if found is None:
                    raise ToolError(f"No {_kind_label(params.list_type)} list found.")
            else:
                found = await lists_api.find_list_by_type(client, "shopping", prefer_default=True)
                if found is None:
                    raise ToolError("No default grocery list found. Use get_lists to see available lists.")

            result = await lists_api.get_list_with_items(client, found.id)
            items = result.items
            if not params.include_completed:
                items = [item for item in items if item.attributes.status == "pending"]

            title = result.skylight_list.attributes.label or found.attributes.label
            if not items:
                suffix = "" if params.include_completed else " (no pending items)"
                return f"{title} is empty{suffix}."
            return _render_items(title, items)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_list", annotations={"title": "Create List", **WRITE})
    async def create_list(params: CreateListInput) -> str:
        """Create a new shopping or to-do list in Skylight."""
        try:
            created = await lists_api.create_list(client, params.label, params.kind, params.color)
            return (
                f'Created {_kind_label(params.kind)} list '
                f'"{created.attributes.label or params.label}" (ID: {created.id})'
            )
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_list", annotations={"title": "Update List", **UPDATE})
    async def update_list(params: UpdateListInput) -> str:
        """Rename a list or change its type or color.

        Identify the list with list_id (from get_lists) or list_name.
        """
        try:
            list_id, _ = await resolve_list(client, params.list_id, params.list_name)
            updated = await lists_api.update_list(client, list_id, params.provided("label", "kind", "color"))
            return f'Updated list: "{updated.attributes.label}"'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_list", annotations={"title": "Delete List", **DELETE})
    async def delete_list(params: DeleteListInput) -> str:
        """Delete a list from Skylight.

        This permanently deletes the list and all its items.
        """
        try:
            list_id, name = await resolve_list(client, params.list_id, params.list_name)
            await lists_api.delete_list(client, list_id)
            return f'Deleted list "{name}"'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_list_item", annotations={"title": "Add List Item", **WRITE})
    async def create_list_item(params: CreateListItemInput) -> str:
        """Add an item to a Skylight list.

        Use this for "Add milk to the shopping list" or "Put 'call doctor' on
        my to-do list". If no list is specified the item goes on the default
        grocery list. Use get_lists to see available lists.
        """
        try:
            list_id, name = await resolve_list(
                client, params.list_id, params.list_name, default_to_grocery=True
            )
            item = await lists_api.create_list_item(client, list_id, params.label, params.section)
            section = f' in section "{params.section}"' if params.section else ""
            return f'Added "{item.attributes.label or params.label}" to {name}{section}'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_list_item", annotations={"title": "Update List Item", **UPDATE})
    async def update_list_item(params: UpdateListItemInput) -> str:
        """Check off, rename, or move a list item to another section.

        Use status="completed" to check an item off ("Check off milk").
        """
        try:
            item = await lists_api.update_list_item(
                client, params.list_id, params.item_id, params.provided("label", "status", "section")
            )
            return f'Updated item: "{item.attributes.label}"{describe_status(params.status)}'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_list_item", annotations={"title": "Delete List Item", **DELETE})
    async def delete_list_item(params: DeleteListItemInput) -> str:
        """Remove an item from a list permanently.

        To check an item off instead, use update_list_item with status="completed".
        """
        try:
            await lists_api.delete_list_item(client, params.list_id, params.item_id)
            return "Deleted item from list"
        except Exception as e:
            raise tool_error(e) from e
