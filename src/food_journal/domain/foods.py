"""Domain models for foods and recipes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NewFood:
    """Food fields supplied by a caller before an id is assigned."""

    name: str
    calories: float
    fat: float
    carbs: float
    protein: float
    serving_size: float
    serving_unit: str
    is_custom: bool
    cholesterol: float | None = None
    sodium: float | None = None
    potassium: float | None = None
    is_pinned: bool = False


@dataclass(frozen=True)
class Food:
    """A nutrition reference item, values given per serving size."""

    id: int
    name: str
    calories: float
    fat: float
    carbs: float
    protein: float
    serving_size: float
    serving_unit: str
    is_custom: bool
    cholesterol: float | None = None
    sodium: float | None = None
    potassium: float | None = None
    is_pinned: bool = False


@dataclass(frozen=True)
class RecipeItem:
    """A food reference inside a recipe, in the food's serving units."""

    food_id: int
    amount: float


@dataclass(frozen=True)
class NewRecipe:
    """Recipe fields supplied by a caller before an id is assigned."""

    name: str
    items: tuple[RecipeItem, ...]
    total_calories: float
    total_fat: float
    total_carbs: float
    total_protein: float
    is_pinned: bool = False


@dataclass(frozen=True)
class Recipe:
    """A named bundle of foods with totals captured at creation time."""

    id: int
    name: str
    items: tuple[RecipeItem, ...]
    total_calories: float
    total_fat: float
    total_carbs: float
    total_protein: float
    is_pinned: bool = False
