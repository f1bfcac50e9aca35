from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..client import SkylightClient
from ..dates import format_date_for_display, get_today_date, parse_date
from ..endpoints import calendar as calendar_api
from . import DELETE, READ_ONLY, UPDATE, WRITE, ToolInput, format_attributes, format_resource_list, tool_error


class GetCalendarEventsInput(ToolInput):
    """Input for listing calendar events."""

    date: Optional[str] = Field(
        default=None,
        description="Start date (YYYY-MM-DD, 'today', 'tomorrow', or a day name). Defaults to today.",
    )
    date_end: Optional[str] = Field(
        default=None,
        description="End date, inclusive (YYYY-MM-DD). Defaults to the start date.",
    )


class CreateCalendarEventInput(ToolInput):
    """Input for creating a calendar event."""

    summary: str = Field(..., description="Event title (e.g., 'Dentist Appointment')", min_length=1)
    starts_at: str = Field(..., description="Start time (ISO format like '2025-01-15T14:00:00')")
    ends_at: str = Field(..., description="End time (ISO format like '2025-01-15T15:00:00')")
    all_day: bool = Field(default=False, description="True for all-day events")
    description: Optional[str] = Field(default=None, description="Additional notes for the event")
    location: Optional[str] = Field(default=None, description="Event location")
    category_ids: Optional[List[str]] = Field(
        default=None, description="Family member (category) IDs to assign"
    )


class UpdateCalendarEventInput(ToolInput):
    """Input for updating a calendar event. Only provided fields change."""

    event_id: str = Field(..., description="ID of the event to update", min_length=1)
    summary: Optional[str] = Field(default=None, description="New event title")
    starts_at: Optional[str] = Field(default=None, description="New start time (ISO format)")
    ends_at: Optional[str] = Field(default=None, description="New end time (ISO format)")
    all_day: Optional[bool] = Field(default=None, description="Change to or from an all-day event")
    description: Optional[str] = Field(default=None, description="Updated notes")
    location: Optional[str] = Field(default=None, description="Updated location")
    category_ids: Optional[List[str]] = Field(
        default=None, description="Updated family member assignments"
    )


class DeleteCalendarEventInput(ToolInput):
    event_id: str = Field(..., description="ID of the event to delete", min_length=1)


def _date_range(start: str, end: str) -> str:
    if start == end:
        return format_date_for_display(start)
    return f"{format_date_for_display(start)} to {format_date_for_display(end)}"


def register_calendar_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_calendar_events", annotations={"title": "Get Calendar Events", **READ_ONLY})
    async def get_calendar_events(params: GetCalendarEventsInput) -> str:
        """Get calendar events from Skylight.

        Use this to answer questions like "What's on my calendar today?",
        "What do we have scheduled this weekend?" or "Are there any events
        on Friday?". Returns events with their titles, times and details.
        """
        try:
            start = parse_date(params.date, client.timezone) if params.date else get_today_date(client.timezone)
            end = parse_date(params.date_end, client.timezone) if params.date_end else start

            events = await calendar_api.get_calendar_events(client, start, end, client.timezone)
            if not events:
                return f"No calendar events found for {_date_range(start, end)}."

            blocks = []
            for event in events:
                lines = [f"- Event (ID: {event.id})"]
                lines.extend(format_attributes(event.attribute_items()))
                blocks.append("\n".join(lines))
            return f"Calendar events for {_date_range(start, end)}:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_source_calendars", annotations={"title": "Get Source Calendars", **READ_ONLY})
    async def get_source_calendars() -> str:
        """Get the calendar accounts synced to Skylight (Google, iCloud, etc.).

        Use this to answer "Which calendars are synced to Skylight?".
        """
        try:
            calendars = await calendar_api.get_source_calendars(client)
            if not calendars:
                return "No calendar sources are connected to Skylight."
            return format_resource_list("Connected calendar sources", calendars, "Calendar")
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_calendar_event", annotations={"title": "Create Calendar Event", **WRITE})
    async def create_calendar_event(params: CreateCalendarEventInput) -> str:
        """Create a new calendar event in Skylight.

        Use this when scheduling an appointment ("Add a dentist appointment on
        Friday at 2pm"), a family activity or a reminder. Use
        get_family_members to find category IDs for assignments.

        Returns:
            str: Confirmation with the new event ID.
        """
        try:
            event: Dict[str, Any] = {
                "summary": params.summary,
                "starts_at": params.starts_at,
                "ends_at": params.ends_at,
                "all_day": params.all_day,
                "timezone": client.timezone,
                "kind": "standard",
            }
            if params.description is not None:
                event["description"] = params.description
            if params.location is not None:
                event["location"] = params.location
            if params.category_ids is not None:
                event["category_ids"] = params.category_ids

            created = await calendar_api.create_calendar_event(client, event)
            return f'Created calendar event "{params.summary}" (ID: {created.id})'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_calendar_event", annotations={"title": "Update Calendar Event", **UPDATE})
    async def update_calendar_event(params: UpdateCalendarEventInput) -> str:
        """Update an existing calendar event: move it, rename it, or change
        its notes, location or assignments. Get the event ID from
        get_calendar_events.
        """
        try:
            updates = params.provided(
                "summary", "starts_at", "ends_at", "all_day", "description", "location", "category_ids"
            )
            event = await calendar_api.update_calendar_event(client, params.event_id, updates)
            return f"Updated calendar event (ID: {event.id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_calendar_event", annotations={"title": "Delete Calendar Event", **DELETE})
    async def delete_calendar_event(params: DeleteCalendarEventInput) -> str:
        """Delete a calendar event from Skylight.

        This permanently removes the event. For recurring events this may
        only delete one instance.
        """
        try:
            await calendar_api.delete_calendar_event(client, params.event_id)
            return f"Deleted calendar event (ID: {params.event_id})"
        except Exception as e:
            raise tool_error(e) from e
