"""Task box tools.

The task box holds unscheduled tasks that can later be given a date on the
Skylight display.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..client import SkylightClient
from ..endpoints import taskbox as taskbox_api
from . import DELETE, READ_ONLY, UPDATE, WRITE, ToolInput, tool_error


class CreateTaskInput(ToolInput):
    summary: str = Field(..., description="Task description", min_length=1)
    emoji: Optional[str] = Field(default=None, description="Emoji icon for the task (e.g., '🧹', '📞')")
    reward_points: Optional[float] = Field(
        default=None, description="Reward points for completing this task", ge=0
    )
    routine: bool = Field(default=False, description="Is this a routine task?")


class UpdateTaskInput(ToolInput):
    task_id: str = Field(..., description="ID of the task (from get_tasks)", min_length=1)
    summary: Optional[str] = Field(default=None, description="New task description")
    emoji: Optional[str] = Field(default=None, description="New emoji icon, or null to clear")
    reward_points: Optional[float] = Field(default=None, description="New reward points, or null to clear")
    routine: Optional[bool] = Field(default=None, description="Mark as a routine task or not")


class DeleteTaskInput(ToolInput):
    task_id: str = Field(..., description="ID of the task to delete (from get_tasks)", min_length=1)


def register_task_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="create_task", annotations={"title": "Create Task", **WRITE})
    async def create_task(params: CreateTaskInput) -> str:
        """Add a task to the Skylight task box.

        Use this when the user says "Add XYZ to my task list", "Remind me to
        do ABC" (without a specific date) or "Put 'clean garage' on the task
        box".
        """
        try:
            task = await taskbox_api.create_task_box_item(
                client,
                summary=params.summary,
                emoji_icon=params.emoji,
                routine=params.routine,
                reward_points=params.reward_points,
            )
            attrs = task.attributes
            lines = [f'Created task: "{attrs.summary or params.summary}" (ID: {task.id})']
            if attrs.emoji_icon:
                lines.append(f"Emoji: {attrs.emoji_icon}")
            if attrs.reward_points:
                lines.append(f"Reward points: {attrs.reward_points}")
            lines.append("\nThe task has been added to the Skylight task box.")
            return "\n".join(lines)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_tasks", annotations={"title": "Get Tasks", **READ_ONLY})
    async def get_tasks() -> str:
        """List the unscheduled tasks in the Skylight task box."""
        try:
            tasks = await taskbox_api.get_task_box_items(client)
            if not tasks:
                return "The task box is empty."

            blocks = []
            for task in tasks:
                attrs = task.attributes
                icon = f"{attrs.emoji_icon} " if attrs.emoji_icon else ""
                lines = [f"- {icon}{attrs.summary} (ID: {task.id})"]
                if attrs.routine:
                    lines.append("  Routine: Yes")
                if attrs.reward_points:
                    lines.append(f"  Reward points: {attrs.reward_points}")
                blocks.append("\n".join(lines))
            return "Task box:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_task", annotations={"title": "Update Task", **UPDATE})
    async def update_task(params: UpdateTaskInput) -> str:
        """Change a task box item. Only the fields you pass are changed."""
        try:
            sent = params.provided("summary", "emoji", "reward_points", "routine")
            if "emoji" in sent:
                sent["emoji_icon"] = sent.pop("emoji")
            task = await taskbox_api.update_task_box_item(client, params.task_id, sent)
            return f'Updated task: "{task.attributes.summary}"'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_task", annotations={"title": "Delete Task", **DELETE})
    async def delete_task(params: DeleteTaskInput) -> str:
        """Remove a task from the Skylight task box permanently."""
        try:
            await taskbox_api.delete_task_box_item(client, params.task_id)
            return f"Deleted task (ID: {params.task_id})"
        except Exception as e:
            raise tool_error(e) from e
