"""MCP tool groups. Each module exposes ``register_*_tools(mcp, client)``."""

import logging
from typing import Any, Dict, Iterable, List

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, ConfigDict

from ..errors import SkylightError, format_error_for_mcp
from ..models import Resource

logger = logging.getLogger(__name__)

READ_ONLY: Dict[str, Any] = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

WRITE: Dict[str, Any] = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "idempotentHint": False,
    "openWorldHint": True,
}

UPDATE: Dict[str, Any] = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

DELETE: Dict[str, Any] = {
    "readOnlyHint": False,
    "destructiveHint": True,
    "idempotentHint": True,
    "openWorldHint": True,
}


class ToolInput(BaseModel):
    """Base for tool inputs."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    def provided(self, *fields: str) -> Dict[str, Any]:
        """Fields the caller actually sent (explicit nulls included)."""
        return {name: getattr(self, name) for name in fields if name in self.model_fields_set}


def tool_error(error: Exception) -> ToolError:
    """Turn any failure into a ToolError so the MCP reply is flagged isError."""
    if isinstance(error, ToolError):
        return error
    if isinstance(error, SkylightError):
        logger.warning("Skylight request failed (%s): %s", error.code, error.message)
    else:
        logger.exception("Unexpected tool failure")
    return ToolError(format_error_for_mcp(error))


def format_attributes(
    attributes: Iterable, indent: str = "  ", skip: Iterable[str] = ()
) -> List[str]:
    """'key: value' lines for every non-null attribute."""
    skipped = set(skip)
    return [
        f"{indent}{key}: {value}"
        for key, value in attributes
        if value is not None and key not in skipped
    ]


def format_resource_list(title: str, resources: Iterable[Resource], label: str) -> str:
    """Generic rendering for resources whose attributes are an open map."""
    blocks = []
    for resource in resources:
        lines = [f"- {label} (ID: {resource.id})"]
        lines.extend(format_attributes(resource.attribute_items()))
        blocks.append("\n".join(lines))
    return f"{title}:\n\n" + "\n\n".join(blocks)


def assignee_not_found(name: str) -> ToolError:
    return ToolError(
        f'Could not find a family member named "{name}". '
        "Use get_family_members to see available family members."
    )


def describe_status(status: Any) -> str:
    if status == "completed":
        return " (marked complete)"
    if status == "pending":
        return " (marked pending)"
    return ""


__all__ = [
    "READ_ONLY",
    "WRITE",
    "UPDATE",
    "DELETE",
    "ToolInput",
    "tool_error",
    "format_attributes",
    "format_resource_list",
    "assignee_not_found",
    "describe_status",
]
