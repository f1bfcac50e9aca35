"""Meal planning tools (Skylight Plus): categories, recipes and scheduled sittings."""

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..client import SkylightClient
from ..dates import add_days, format_date_for_display, get_today_date, parse_date
from ..endpoints import meals as meals_api
from . import DELETE, READ_ONLY, UPDATE, WRITE, ToolInput, format_attributes, tool_error


class RecipeIdInput(ToolInput):
    recipe_id: str = Field(..., description="ID of the recipe (from get_recipes)", min_length=1)


class CreateRecipeInput(ToolInput):
    summary: str = Field(..., description="Recipe name (e.g., 'Spaghetti Bolognese')", min_length=1)
    description: Optional[str] = Field(default=None, description="Recipe description or notes")
    meal_category_id: Optional[str] = Field(
        default=None, description="Meal category ID (use get_meal_categories)"
    )


class UpdateRecipeInput(ToolInput):
    recipe_id: str = Field(..., description="ID of the recipe to update", min_length=1)
    summary: Optional[str] = Field(default=None, description="New recipe name")
    description: Optional[str] = Field(default=None, description="Updated description (null to clear)")
    meal_category_id: Optional[str] = Field(default=None, description="New meal category ID")


class GetMealSittingsInput(ToolInput):
    date: Optional[str] = Field(default=None, description="Start date (YYYY-MM-DD or 'today'). Defaults to today.")
    date_end: Optional[str] = Field(
        default=None, description="End date (YYYY-MM-DD). Defaults to 7 days from start."
    )


class CreateMealSittingInput(ToolInput):
    date: str = Field(..., description="Date for the meal (YYYY-MM-DD or 'today', 'tomorrow')", min_length=1)
    meal_category_id: str = Field(..., description="Meal category ID (e.g., the ID for 'Dinner')", min_length=1)
    recipe_id: Optional[str] = Field(default=None, description="Recipe ID to schedule")


class UpdateMealSittingInput(ToolInput):
    sitting_id: str = Field(..., description="ID of the scheduled meal (from get_meal_sittings)", min_length=1)
    date: Optional[str] = Field(default=None, description="New date (YYYY-MM-DD or 'tomorrow')")
    meal_category_id: Optional[str] = Field(default=None, description="New meal category ID")
    recipe_id: Optional[str] = Field(default=None, description="New recipe ID (null to clear)")


class DeleteMealSittingInput(ToolInput):
    sitting_id: str = Field(..., description="ID of the scheduled meal to delete", min_length=1)


def register_meal_tools(mcp: FastMCP, client: SkylightClient) -> None:
    @mcp.tool(name="get_meal_categories", annotations={"title": "Get Meal Categories", **READ_ONLY})
    async def get_meal_categories() -> str:
        """Get meal categories (Breakfast, Lunch, Dinner, etc.). Plus subscription required.

        Use this to find category IDs before scheduling meals.
        """
        try:
            categories = await meals_api.get_meal_categories(client)
            if not categories:
                return "No meal categories found."
            lines = [f"- {c.attributes.name or 'Unknown'} (ID: {c.id})" for c in categories]
            return "Meal categories:\n\n" + "\n".join(lines)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_recipes", annotations={"title": "Get Recipes", **READ_ONLY})
    async def get_recipes() -> str:
        """Get all saved recipes. Plus subscription required."""
        try:
            recipes = await meals_api.get_recipes(client)
            if not recipes:
                return "No recipes found."
            blocks = []
            for recipe in recipes:
                lines = [f"- {recipe.attributes.summary or 'Untitled'} (ID: {recipe.id})"]
                if recipe.attributes.description:
                    lines.append(f"  Description: {recipe.attributes.description}")
                blocks.append("\n".join(lines))
            return "Recipes:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_recipe", annotations={"title": "Get Recipe", **READ_ONLY})
    async def get_recipe(params: RecipeIdInput) -> str:
        """Get the details of one recipe. Plus subscription required."""
        try:
            recipe = await meals_api.get_recipe(client, params.recipe_id)
            lines = [f"Recipe: {recipe.attributes.summary or 'Untitled'}"]
            lines.extend(format_attributes(recipe.attribute_items(), indent="", skip=("summary",)))
            if recipe.meal_category_id:
                lines.append(f"meal_category_id: {recipe.meal_category_id}")
            return "\n".join(lines)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_recipe", annotations={"title": "Create Recipe", **WRITE})
    async def create_recipe(params: CreateRecipeInput) -> str:
        """Save a new recipe. Plus subscription required."""
        try:
            recipe = await meals_api.create_recipe(
                client, params.summary, params.description, params.meal_category_id
            )
            return f'Created recipe "{params.summary}" (ID: {recipe.id})'
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_recipe", annotations={"title": "Update Recipe", **UPDATE})
    async def update_recipe(params: UpdateRecipeInput) -> str:
        """Change a recipe's name, description or category. Plus subscription required."""
        try:
            recipe = await meals_api.update_recipe(
                client, params.recipe_id, params.provided("summary", "description", "meal_category_id")
            )
            return f"Updated recipe (ID: {recipe.id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_recipe", annotations={"title": "Delete Recipe", **DELETE})
    async def delete_recipe(params: RecipeIdInput) -> str:
        """Delete a recipe permanently. Plus subscription required."""
        try:
            await meals_api.delete_recipe(client, params.recipe_id)
            return f"Deleted recipe (ID: {params.recipe_id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(
        name="add_recipe_to_grocery_list",
        annotations={"title": "Add Recipe to Grocery List", **WRITE},
    )
    async def add_recipe_to_grocery_list(params: RecipeIdInput) -> str:
        """Add a recipe's ingredients to the grocery list. Plus subscription required.

        Use this for "Add the ingredients for lasagna to my shopping list".
        """
        try:
            await meals_api.add_recipe_to_grocery_list(client, params.recipe_id)
            return "Added recipe ingredients to grocery list"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="get_meal_sittings", annotations={"title": "Get Scheduled Meals", **READ_ONLY})
    async def get_meal_sittings(params: GetMealSittingsInput) -> str:
        """Get the meal plan for a date range. Plus subscription required.

        Use this for "What's for dinner this week?".
        """
        try:
            start = parse_date(params.date, client.timezone) if params.date else get_today_date(client.timezone)
            end = parse_date(params.date_end, client.timezone) if params.date_end else add_days(start, 7)

            sittings = await meals_api.get_meal_sittings(client, date_min=start, date_max=end)
            if not sittings:
                return (
                    f"No meals scheduled for {format_date_for_display(start)} "
                    f"to {format_date_for_display(end)}."
                )

            blocks = []
            for sitting in sittings:
                heading = f"- {sitting.attributes.date or 'Unknown date'}"
                if sitting.attributes.meal_time:
                    heading += f" ({sitting.attributes.meal_time})"
                lines = [heading, f"  ID: {sitting.id}"]
                if sitting.recipe_id:
                    lines.append(f"  Recipe ID: {sitting.recipe_id}")
                blocks.append("\n".join(lines))
            return "Scheduled meals:\n\n" + "\n\n".join(blocks)
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="create_meal_sitting", annotations={"title": "Schedule Meal", **WRITE})
    async def create_meal_sitting(params: CreateMealSittingInput) -> str:
        """Schedule a meal on a date. Plus subscription required.

        Get the meal category ID from get_meal_categories and, optionally, a
        recipe ID from get_recipes.
        """
        try:
            meal_date = parse_date(params.date, client.timezone)
            sitting = await meals_api.create_meal_sitting(
                client, meal_date, params.meal_category_id, params.recipe_id
            )
            return f"Scheduled meal for {format_date_for_display(meal_date)} (ID: {sitting.id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="update_meal_sitting", annotations={"title": "Update Scheduled Meal", **UPDATE})
    async def update_meal_sitting(params: UpdateMealSittingInput) -> str:
        """Move a scheduled meal or swap its recipe. Plus subscription required."""
        try:
            changes: Dict[str, Any] = params.provided("meal_category_id")
            if params.date:
                changes["date"] = parse_date(params.date, client.timezone)
            if "recipe_id" in params.model_fields_set:
                changes["meal_recipe_id"] = params.recipe_id
            sitting = await meals_api.update_meal_sitting(client, params.sitting_id, changes)
            return f"Updated scheduled meal (ID: {sitting.id})"
        except Exception as e:
            raise tool_error(e) from e

    @mcp.tool(name="delete_meal_sitting", annotations={"title": "Delete Scheduled Meal", **DELETE})
    async def delete_meal_sitting(params: DeleteMealSittingInput) -> str:
        """Remove a meal from the plan. Plus subscription required."""
        try:
            await meals_api.delete_meal_sitting(client, params.sitting_id)
            return f"Deleted scheduled meal (ID: {params.sitting_id})"
        except Exception as e:
            raise tool_error(e) from e
