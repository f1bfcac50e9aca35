"""Pydantic models for Skylight's JSON:API-style responses.

Attribute shapes are reverse-engineered. Typed attribute models cover the
resources whose fields the tools rely on; everything else keeps an open
key/value map. Unknown keys are always preserved.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ParseError

R = TypeVar("R", bound="Resource")


class ResourceId(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    type: str
    id: str


class Relationship(BaseModel):
    model_config = ConfigDict(extra="allow")

    data: Union[ResourceId, List[ResourceId], None] = None


class Attributes(BaseModel):
    """Known fields of a resource; extra keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class Resource(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    type: str
    id: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Dict[str, Relationship] = Field(default_factory=dict)

    def related_id(self, name: str) -> Optional[str]:
        """ID of a to-one relationship, or None when unset."""
        rel = self.relationships.get(name)
        if rel is None or not isinstance(rel.data, ResourceId):
            return None
        return rel.data.id

    def related_ids(self, name: str) -> List[str]:
        rel = self.relationships.get(name)
        if rel is None or rel.data is None:
            return []
        if isinstance(rel.data, ResourceId):
            return [rel.data.id]
        return [item.id for item in rel.data]

    def attribute_items(self):
        attrs = self.attributes
        if isinstance(attrs, Attributes):
            attrs = attrs.as_dict()
        return attrs.items()


# ─── Typed attributes ────────────────────────────────────────────────────────


class CategoryAttributes(Attributes):
    label: Optional[str] = None
    color: Optional[str] = None
    selected_for_chore_chart: Optional[bool] = None
    linked_to_profile: Optional[bool] = None
    profile_pic_url: Optional[str] = None


class Category(Resource):
    attributes: CategoryAttributes = Field(default_factory=CategoryAttributes)


class ChoreAttributes(Attributes):
    summary: Optional[str] = None
    status: Optional[str] = None
    start: Optional[str] = None
    start_time: Optional[str] = None
    completed_on: Optional[str] = None
    recurring: Optional[bool] = None
    recurring_until: Optional[str] = None
    recurrence_set: Optional[Union[str, List[str]]] = None
    reward_points: Optional[Union[int, float]] = None
    emoji_icon: Optional[str] = None
    routine: Optional[bool] = None
    position: Optional[int] = None


class Chore(Resource):
    attributes: ChoreAttributes = Field(default_factory=ChoreAttributes)

    @property
    def category_id(self) -> Optional[str]:
        return self.related_id("category")


class ListAttributes(Attributes):
    label: Optional[str] = None
    color: Optional[str] = None
    kind: Optional[str] = None
    default_grocery_list: Optional[bool] = None


class SkylightList(Resource):
    attributes: ListAttributes = Field(default_factory=ListAttributes)

    @property
    def item_count(self) -> int:
        return len(self.related_ids("list_items"))


class ListItemAttributes(Attributes):
    label: Optional[str] = None
    status: Optional[str] = None
    section: Optional[str] = None
    position: Optional[int] = None
    created_at: Optional[str] = None


class ListItem(Resource):
    attributes: ListItemAttributes = Field(default_factory=ListItemAttributes)


class TaskBoxItemAttributes(Attributes):
    summary: Optional[str] = None
    emoji_icon: Optional[str] = None
    routine: Optional[bool] = None
    reward_points: Optional[Union[int, float]] = None


class TaskBoxItem(Resource):
    attributes: TaskBoxItemAttributes = Field(default_factory=TaskBoxItemAttributes)


class MealCategoryAttributes(Attributes):
    name: Optional[str] = None
    position: Optional[int] = None


class MealCategory(Resource):
    attributes: MealCategoryAttributes = Field(default_factory=MealCategoryAttributes)


class RecipeAttributes(Attributes):
    summary: Optional[str] = None
    description: Optional[str] = None


class Recipe(Resource):
    attributes: RecipeAttributes = Field(default_factory=RecipeAttributes)

    @property
    def meal_category_id(self) -> Optional[str]:
        return self.related_id("meal_category")


class MealSittingAttributes(Attributes):
    date: Optional[str] = None
    meal_time: Optional[str] = None


class MealSitting(Resource):
    attributes: MealSittingAttributes = Field(default_factory=MealSittingAttributes)

    @property
    def recipe_id(self) -> Optional[str]:
        return self.related_id("meal_recipe")


# ─── Document parsing ────────────────────────────────────────────────────────


def _document(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or "data" not in payload:
        raise ParseError("Unexpected API response format: missing 'data'")
    return payload


def parse_resource(model: Type[R], payload: Any) -> R:
    """Parse ``{"data": {...}}`` into a single resource."""
    data = _document(payload)["data"]
    if isinstance(data, list):
        raise ParseError(f"Expected a single {model.__name__}, got a list")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Unexpected {model.__name__} format: {e.error_count()} invalid field(s)") from e


def parse_resources(model: Type[R], payload: Any) -> List[R]:
    """Parse ``{"data": [...]}`` into a list of resources."""
    data = _document(payload)["data"]
    if not isinstance(data, list):
        raise ParseError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
    try:
        return [model.model_validate(item) for item in data]
    except ValidationError as e:
        raise ParseError(f"Unexpected {model.__name__} format: {e.error_count()} invalid field(s)") from e


def parse_included(model: Type[R], payload: Any, type_name: Optional[str] = None) -> List[R]:
    """Side-loaded resources, optionally restricted to one JSON:API type."""
    included = (payload.get("included") or []) if isinstance(payload, dict) else []
    try:
        return [
            model.model_validate(item)
            for item in included
            if type_name is None or item.get("type") == type_name
        ]
    except (ValidationError, AttributeError) as e:
        raise ParseError(f"Unexpected included {model.__name__} format") from e
