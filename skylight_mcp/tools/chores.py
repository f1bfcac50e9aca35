from typing import Any, Dict, Literal, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..client import SkylightClient
from ..dates import add_days, format_date_for_display, get_today_date, parse_date, parse_time
from ..endpoints import chores as chores_api
from ..endpoints.categories import find_category_by_name
from ..models import Chore
from . import DELETE, READ_ONLY, UPDATE, WRITE, ToolInput, assignee_not_found, describe_status, tool_error

RECURRENCE_SHORTHANDS = {
    "daily": "RRULE:FREQ=DAILY",
    "weekly": "RRULE:FREQ=WEEKLY",
    "weekdays": "RRULE:FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR",
}


def recurrence_rule(pattern: Optional[str]) -> Optional[str]:
    """Map 'daily', 'weekly' or 'weekdays' to an RRULE; anything else passes through."""
    if not pattern:
        return None
    return RECURRENCE_SHORTHANDS.get(pattern.strip().lower(), pattern.strip())


class GetChoresInput(ToolInput):
    """Input for listing chores."""

    date: Optional[str] = Field(
        default=None, description="Start date (YYYY-MM-DD or 'today'). Defaults to today."
    )
    date_end: Optional[str] = Field(
        default=None, description="End date (YYYY-MM-DD). Defaults to 7 days from start."
    )
    include_late: bool = Field(default=True, description="Include overdue chores from past dates")
    assignee: Optional[str] = Field(
        default=None, description="Filter by family member name (e.g., 'Dad', 'Mom')"
    )
    status: Literal["pending", "completed", "all"] = Field(
        default="pending", description="Filter by completion status"
    )


class CreateChoreInput(ToolInput):
    """Input for creating a chore."""

    summary: str = Field(..., description="Chore description (e.g., 'Empty the dishwasher')", min_length=1)
    date: Optional[str] = Field(
        default=None,
        description="Due date (YYYY-MM-DD or 'today', 'tomorrow', day name). Defaults to today.",
    )
    time: Optional[str] = Field(default=None, description="Due time (e.g., '10:00 AM', '14:30')")
    assignee: Optional[str] = Field(
        default=None, description="Family member to assign (e.g., 'Dad', 'Mom', 'Kids')"
    )
    recurring: bool = Field(default=False, description="Is this a recurring chore?")
    recurrence_pattern: Optional[str] = Field(
        default=None, description="For recurring: 'daily', 'weekly', 'weekdays', or an RRULE string"
    )
    reward_points: Optional[float] = Field(
        default=None, description="Reward points for completing this chore", ge=0
    )
    emoji_icon: Optional[str] = Field(default=None, description="Emoji shown next to the chore")


class UpdateChoreInput(ToolInput):
    """Input for updating a chore. Pass null to clear time, assignee or reward points."""

    chore_id: str = Field(..., description="ID of the chore to update (from get_chores)", min_length=1)
    summary: Optional[str] = Field(default=None, description="New chore description")
    status: Optional[Literal["pending", "completed"]] = Field(
        default=None, description="'completed' to mark done, 'pending' to mark incomplete"
    )
    date: Optional[str] = Field(default=None, description="New due date (YYYY-MM-DD or 'today', 'tomorrow')")
    time: Optional[str] = Field(default=None, description="New due time (e.g., '10:00 AM'), or null to clear")
    assignee: Optional[str] = Field(
        default=None, description="New family member assignment, or null to unassign"
    )
    reward_points: Optional[float] = Field(default=None, description="New reward points, or null to clear")


class DeleteChoreInput(ToolInput):
    chore_id: str = Field(..., description="ID of the chore to delete (from get_chores)", min_length=1)


def _format_chore(chore: Chore, assignee_name: Optional[str]) -> str:
    attrs = chore.attributes
    when = format_date_for_display(attrs.start)
    if attrs.start_time:
        when += f" at {attrs.start_time}"

    lines = [
        f"- {attrs.summary} (ID: {chore.id})",
        f"  Date: {when}",
        f"  Status: {attrs.status}",
    ]
    if assignee_name:
        lines.append(f"  Assigned to: {assignee_name}")
    if attrs.recurring:
        rule = attrs.recurrence_set
        if isinstance(rule, list):
            rule = ", ".join(rule)
        lines.append(f"  Recurring: Yes ({rule})" if rule else "  Recurring: Yes")
    if attrs.reward_points:
        lines.append(f"  Reward points: {attrs.reward_points}")
    return "\n".join(lines)


def register_chore_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_chores", annotations={"title": "Get Chores", **READ_ONLY})
    async def get_chores(params: GetChoresInput) -> str:
        """Get chores from Skylight.

        Use this to answer questions like:
        - "What chores do I need to do today?"
        - "Show me this week's chores"
        - "What chores does [name] have?"

        Returns chores with their assignees, due dates and completion status.
        """
        try:
            start = parse_date(params.date, client.timezone) if params.date else get_today_date(client.timezone)
            end = parse_date(params.date_end, client.timezone) if params.date_end else add_days(start, 7)

            result = await chores_api.get_chores(
                client, after=start, before=end, include_late=params.include_late
            )
            names = {c.id: c.attributes.label or "Unknown" for c in result.categories}

            chores = result.chores
            if params.status != "all":
                chores = [c for c in chores if c.attributes.status == params.status]
            if params.assignee:
                needle = params.assignee.lower()
                chores = [
                    c for c in chores
                    if c.category_id and needle in names.get(c.category_id, "").lower()
                ]

            if not chores:
                status = "" if params.status == "all" else f"{params.status} "
                suffix = f" for {params.assignee}" if params.assignee else ""
                return f"No {status}chores found{suffix}."

            blocks = [_format_chore(c, names.get(c.category_id)) for c in chores]
            return "Chores:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_chore", annotations={"title": "Create Chore", **WRITE})
    async def create_chore(params: CreateChoreInput) -> str:
        """Add a new chore to the Skylight chore chart.

        Use this to add a task like "empty the dishwasher", assign chores to
        family members, or create recurring chores. Recurrence accepts
        'daily', 'weekly', 'weekdays' or a raw RRULE.
        """
        try:
            start = parse_date(params.date, client.timezone) if params.date else get_today_date(client.timezone)

            category_id = None
            if params.assignee:
                category = await find_category_by_name(client, params.assignee)
                if category is None:
                    raise assignee_not_found(params.assignee)
                category_id = category.id

            rule = recurrence_rule(params.recurrence_pattern) if params.recurring else None

            chore = await chores_api.create_chore(
                client,
                summary=params.summary,
                start=start,
                start_time=parse_time(params.time) if params.time else None,
                recurring=params.recurring,
                recurrence_set=rule,
                category_id=category_id,
                reward_points=params.reward_points,
                emoji_icon=params.emoji_icon,
            )

            attrs = chore.attributes
            when = format_date_for_display(attrs.start or start)
            if attrs.start_time:
                when += f" at {attrs.start_time}"
            lines = [f'Created chore: "{attrs.summary or params.summary}" (ID: {chore.id})', f"Date: {when}"]
            if params.assignee:
                lines.append(f"Assigned to: {params.assignee}")
            if attrs.recurring:
                lines.append("Recurring: Yes")
            return "\n".join(lines)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_chore", annotations={"title": "Update Chore", **UPDATE})
    async def update_chore(params: UpdateChoreInput) -> str:
        """Update an existing chore.

        Use this to mark a chore done ("Mark 'dishes' as done"), reassign it
        ("Reassign the trash to Dad") or change its details. Only the fields
        you pass are changed.
        """
        try:
            sent = params.provided("summary", "status", "date", "time", "assignee", "reward_points")
            changes: Dict[str, Any] = {}
            if "summary" in sent:
                changes["summary"] = sent["summary"]
            if "status" in sent:
                changes["status"] = sent["status"]
            if sent.get("date"):
                changes["start"] = parse_date(sent["date"], client.timezone)
            if "time" in sent:
                changes["start_time"] = parse_time(sent["time"]) if sent["time"] else None
            if "reward_points" in sent:
                changes["reward_points"] = sent["reward_points"]
            if "assignee" in sent:
                if sent["assignee"] is None:
                    changes["category_id"] = None
                else:
                    category = await find_category_by_name(client, sent["assignee"])
                    if category is None:
                        raise assignee_not_found(sent["assignee"])
                    changes["category_id"] = category.id

            chore = await chores_api.update_chore(client, params.chore_id, changes)
            return f'Updated chore: "{chore.attributes.summary}"{describe_status(params.status)}'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_chore", annotations={"title": "Delete Chore", **DELETE})
    async def delete_chore(params: DeleteChoreInput) -> str:
        """Delete a chore from Skylight.

        This permanently removes the chore. For recurring chores this may only
        delete one instance.
        """
        try:
            await chores_api.delete_chore(client, params.chore_id)
            return f"Deleted chore (ID: {params.chore_id})"
        except Exception as e:
            raise tool_error(e) from e
