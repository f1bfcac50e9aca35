from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..models import MealCategory, MealSitting, Recipe, parse_resource, parse_resources

MEALS_PATH = "/api/frames/{frame_id}/meals"
RECIPES_PATH = f"{MEALS_PATH}/recipes"
SITTINGS_PATH = f"{MEALS_PATH}/sittings"


async def get_meal_categories(client: SkylightClient) -> List[MealCategory]:
    payload = await client.get(f"{MEALS_PATH}/categories")
    return parse_resources(MealCategory, payload)


async def get_recipes(client: SkylightClient, include: str = "meal_category") -> List[Recipe]:
    payload = await client.get(RECIPES_PATH, {"include": include})
    return parse_resources(Recipe, payload)


async def get_recipe(client: SkylightClient, recipe_id: str) -> Recipe:
    payload = await client.get(f"{RECIPES_PATH}/{recipe_id}", {"include": "meal_category"})
    return parse_resource(Recipe, payload)


async def create_recipe(
    client: SkylightClient,
    summary: str,
    description: Optional[str] = None,
    meal_category_id: Optional[str] = None,
) -> Recipe:
    body: Dict[str, Any] = {"summary": summary, "description": description}
    if meal_category_id:
        body["meal_category_id"] = meal_category_id
    payload = await client.post(RECIPES_PATH, body)
    return parse_resource(Recipe, payload)


async def update_recipe(client: SkylightClient, recipe_id: str, changes: Dict[str, Any]) -> Recipe:
    body = {
        key: changes[key]
        for key in ("summary", "description", "meal_category_id")
        if key in changes
    }
    payload = await client.patch(f"{RECIPES_PATH}/{recipe_id}", body)
    return parse_resource(Recipe, payload)


async def delete_recipe(client: SkylightClient, recipe_id: str) -> None:
    await client.delete(f"{RECIPES_PATH}/{recipe_id}")


async def add_recipe_to_grocery_list(client: SkylightClient, recipe_id: str) -> None:
    await client.post(f"{RECIPES_PATH}/{recipe_id}/add_to_grocery_list", {})


async def get_meal_sittings(
    client: SkylightClient, date_min: Optional[str] = None, date_max: Optional[str] = None
) -> List[MealSitting]:
    payload = await client.get(SITTINGS_PATH, {"date_min": date_min, "date_max": date_max})
    return parse_resources(MealSitting, payload)


async def create_meal_sitting(
    client: SkylightClient,
    date: str,
    meal_category_id: str,
    recipe_id: Optional[str] = None,
) -> MealSitting:
    body: Dict[str, Any] = {"date": date, "meal_category_id": meal_category_id}
    if recipe_id:
        body["meal_recipe_id"] = recipe_id
    payload = await client.post(SITTINGS_PATH, body)
    return parse_resource(MealSitting, payload)


async def update_meal_sitting(
    client: SkylightClient, sitting_id: str, changes: Dict[str, Any]
) -> MealSitting:
    body = {
        key: changes[key]
        for key in ("date", "meal_category_id", "meal_recipe_id")
        if key in changes
    }
    payload = await client.patch(f"{SITTINGS_PATH}/{sitting_id}", body)
    return parse_resource(MealSitting, payload)


async def delete_meal_sitting(client: SkylightClient, sitting_id: str) -> None:
    await client.delete(f"{SITTINGS_PATH}/{sitting_id}")
