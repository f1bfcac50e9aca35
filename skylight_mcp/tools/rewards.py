"""Reward tools. Creating and changing rewards needs a Skylight Plus subscription."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..client import SkylightClient
from ..endpoints import rewards as rewards_api
from ..endpoints.categories import find_category_by_name
from . import (
    DELETE,
    READ_ONLY,
    UPDATE,
    WRITE,
    ToolInput,
    assignee_not_found,
    format_resource_list,
    tool_error,
)


class GetRewardsInput(ToolInput):
    redeemed_since: Optional[str] = Field(
        default=None, description="Only rewards redeemed after this date (ISO datetime)"
    )


class CreateRewardInput(ToolInput):
    name: str = Field(..., description="Reward name (e.g., '30 min Screen Time')", min_length=1)
    point_value: float = Field(..., description="Points needed to redeem this reward", ge=0)
    description: Optional[str] = Field(default=None, description="Additional details about the reward")
    emoji_icon: Optional[str] = Field(default=None, description="Emoji for the reward (e.g., '🎮')")
    assignee: Optional[str] = Field(default=None, description="Family member to assign this reward to")
    respawn_on_redemption: bool = Field(default=False, description="Can be redeemed multiple times")


class UpdateRewardInput(ToolInput):
    reward_id: str = Field(..., description="ID of the reward to update (from get_rewards)", min_length=1)
    name: Optional[str] = Field(default=None, description="New reward name")
    point_value: Optional[float] = Field(default=None, description="New point cost", ge=0)
    description: Optional[str] = Field(default=None, description="Updated description (null to clear)")
    emoji_icon: Optional[str] = Field(default=None, description="Updated emoji (null to clear)")
    respawn_on_redemption: Optional[bool] = Field(default=None, description="Can be redeemed multiple times")
    assignee: Optional[str] = Field(
        default=None, description="Family member to assign the reward to (null to unassign)"
    )


class RewardIdInput(ToolInput):
    reward_id: str = Field(..., description="ID of the reward (from get_rewards)", min_length=1)


class RedeemRewardInput(ToolInput):
    reward_id: str = Field(..., description="ID of the reward to redeem (from get_rewards)", min_length=1)
    assignee: Optional[str] = Field(
        default=None, description="Family member redeeming the reward (their points are used)"
    )


def register_reward_tools(mcp: FastMCP, client: SkylightClient) -> None:
    async def category_for(name: str) -> str:
        category = await find_category_by_name(client, name)
        if category is None:
            raise assignee_not_found(name)
        return category.id

    @mcp.tool(name="get_rewards", annotations={"title": "Get Rewards", **READ_ONLY})
    async def get_rewards(params: GetRewardsInput) -> str:
        """Get rewards that family members can redeem with reward points.

        Use this to answer "What rewards can we redeem?" or "What can the
        kids earn?".
        """
        try:
            rewards = await rewards_api.get_rewards(client, redeemed_at_min=params.redeemed_since)
            if not rewards:
                return "No rewards found."
            return format_resource_list("Available rewards", rewards, "Reward")
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_reward_points", annotations={"title": "Get Reward Points", **READ_ONLY})
    async def get_reward_points() -> str:
        """Get each family member's reward point balance.

        Use this to answer "How many points does [name] have?" or "Who has
        the most points?".
        """
        try:
            points = await rewards_api.get_reward_points(client)
            if not points:
                return "No reward points found."
            return format_resource_list("Reward points", points, "Points")
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_reward", annotations={"title": "Create Reward", **WRITE})
    async def create_reward(params: CreateRewardInput) -> str:
        """Create a reward that can be redeemed with points (Plus subscription required).

        Use this for "Create a reward for 30 minutes of screen time" or "Add a
        pizza night reward worth 100 points".

        Args:
            params (CreateRewardInput): Validated input containing:
                - name (str): Reward name
                - point_value (float): Points needed to redeem
                - description (Optional[str]): Extra details
                - emoji_icon (Optional[str]): Emoji shown with the reward
                - assignee (Optional[str]): Family member the reward is for
                - respawn_on_redemption (bool): Whether it can be redeemed repeatedly

        Returns:
            str: Confirmation with the reward ID.
        """
        try:
            category_ids = [await category_for(params.assignee)] if params.assignee else None
            reward = await rewards_api.create_reward(
                client,
                name=params.name,
                point_value=params.point_value,
                description=params.description,
                emoji_icon=params.emoji_icon,
                category_ids=category_ids,
                respawn_on_redemption=params.respawn_on_redemption,
            )
            return f'Created reward "{params.name}" worth {params.point_value:g} points (ID: {reward.id})'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_reward", annotations={"title": "Update Reward", **UPDATE})
    async def update_reward(params: UpdateRewardInput) -> str:
        """Update an existing reward (Plus subscription required).

        Use this for "Make the screen time reward cost 50 points". Only the
        fields you pass are changed.
        """
        try:
            changes = params.provided(
                "name", "point_value", "description", "emoji_icon", "respawn_on_redemption"
            )
            if "assignee" in params.model_fields_set:
                changes["category_id"] = (
                    await category_for(params.assignee) if params.assignee else None
                )
            reward = await rewards_api.update_reward(client, params.reward_id, changes)
            return f"Updated reward (ID: {reward.id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_reward", annotations={"title": "Delete Reward", **DELETE})
    async def delete_reward(params: RewardIdInput) -> str:
        """Delete a reward permanently (Plus subscription required)."""
        try:
            await rewards_api.delete_reward(client, params.reward_id)
            return f"Deleted reward (ID: {params.reward_id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="redeem_reward", annotations={"title": "Redeem Reward", **WRITE})
    async def redeem_reward(params: RedeemRewardInput) -> str:
        """Redeem a reward using a family member's points (Plus subscription required).

        Use this for "Redeem the screen time reward for Johnny".
        """
        try:
            category_id = await category_for(params.assignee) if params.assignee else None
            reward = await rewards_api.redeem_reward(client, params.reward_id, category_id)
            suffix = f" for {params.assignee}" if params.assignee else ""
            return f"Redeemed reward (ID: {reward.id}){suffix}"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="unredeem_reward", annotations={"title": "Unredeem Reward", **UPDATE})
    async def unredeem_reward(params: RewardIdInput) -> str:
        """Cancel a reward redemption made by mistake (Plus subscription required)."""
        try:
            reward = await rewards_api.unredeem_reward(client, params.reward_id)
            return f"Unredeemed reward (ID: {reward.id})"
        except Exception as e:
            raise tool_error(e) from e
