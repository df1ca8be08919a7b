"""Pydantic models for the journal HTTP API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from food_journal.domain.foods import Food, NewFood, NewRecipe, Recipe, RecipeItem
from food_journal.domain.goals import DailyGoals
from food_journal.domain.logs import MealTime
from food_journal.services.cart import CartItem

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}:\d{2}$"


class ApiModel(BaseModel):
    """Base model using camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FoodIn(ApiModel):
    """Food fields sent when creating or replacing a food."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)
    protein: float = Field(ge=0)
    serving_size: float = Field(gt=0)
    serving_unit: str
    cholesterol: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    potassium: float | None = Field(default=None, ge=0)
    is_custom: bool = True
    is_pinned: bool = False

    def to_new_food(self) -> NewFood:
        """Return the domain model for a new food."""
        return NewFood(**self.model_dump())

    def to_food(self, food_id: int) -> Food:
        """Return the domain model for a food with a known id."""
        return Food(id=food_id, **self.model_dump())


class FoodOut(FoodIn):
    """Stored food."""

    id: int


class RecipeItemModel(ApiModel):
    """Food reference inside a recipe."""

    food_id: int
    amount: float = Field(gt=0)


class RecipeIn(ApiModel):
    """Recipe fields sent when creating or replacing a recipe."""

    name: str = Field(min_length=1)
    items: list[RecipeItemModel]
    total_calories: float = Field(ge=0)
    total_fat: float = Field(ge=0)
    total_carbs: float = Field(ge=0)
    total_protein: float = Field(ge=0)
    is_pinned: bool = False

    def _fields(self) -> dict[str, object]:
        fields = self.model_dump(exclude={"items"})
        fields["items"] = tuple(
            RecipeItem(food_id=item.food_id, amount=item.amount) for item in self.items
        )
        return fields

    def to_new_recipe(self) -> NewRecipe:
        """Return the domain model for a new recipe."""
        return NewRecipe(**self._fields())

    def to_recipe(self, recipe_id: int) -> Recipe:
        """Return the domain model for a recipe with a known id."""
        return Recipe(id=recipe_id, **self._fields())


class RecipeOut(RecipeIn):
    """Stored recipe."""

    id: int


class LogIn(ApiModel):
    """Fields shared by food and recipe log requests.

    ``time_logged`` and ``time_of_day`` default to the current time and the
    matching meal-time slot.
    """

    date: str = Field(pattern=DATE_PATTERN)
    amount: float = Field(gt=0)
    time_logged: str | None = Field(default=None, pattern=TIME_PATTERN)
    time_of_day: MealTime | None = None


class FoodLogIn(LogIn):
    """Request to log an amount of a food."""

    food_id: int


class RecipeLogIn(LogIn):
    """Request to log servings of a recipe."""

    recipe_id: int


class CartItemModel(ApiModel):
    """Cart item on the wire."""

    amount: float = Field(gt=0)
    food_id: int | None = None
    recipe_id: int | None = None

    @model_validator(mode="after")
    def _one_reference(self) -> "CartItemModel":
        if (self.food_id is None) == (self.recipe_id is None):
            raise ValueError("Set exactly one of foodId or recipeId")
        return self

    def to_item(self) -> CartItem:
        """Return the service-level cart item."""
        return CartItem(
            amount=self.amount, food_id=self.food_id, recipe_id=self.recipe_id
        )


class CartLogIn(ApiModel):
    """Request to log a whole cart."""

    date: str = Field(pattern=DATE_PATTERN)
    items: list[CartItemModel]
    time_logged: str | None = Field(default=None, pattern=TIME_PATTERN)
    time_of_day: MealTime | None = None


class CartRecipeIn(ApiModel):
    """Request to save a cart of foods as a recipe."""

    name: str = Field(min_length=1)
    items: list[CartItemModel] = Field(min_length=1)


class IdOut(ApiModel):
    """Identifier of a created record."""

    id: int


class IdsOut(ApiModel):
    """Identifiers of created records."""

    ids: list[int]


class DayNutrientOut(ApiModel):
    """Resolved log entry."""

    id: int
    name: str
    calories: float
    fat: float
    carbs: float
    protein: float
    amount: float
    time_logged: str
    time_of_day: MealTime
    is_recipe: bool


class DailyTotalsOut(ApiModel):
    """Macro totals for a day."""

    date: str
    calories: float
    fat: float
    carbs: float
    protein: float


class DayOut(ApiModel):
    """A logged day with its totals."""

    date: str
    entries: list[DayNutrientOut]
    totals: DailyTotalsOut


class WeekOut(ApiModel):
    """Seven days of totals, oldest first."""

    days: list[DailyTotalsOut]
    avg_calories: float
    avg_fat: float
    avg_carbs: float
    avg_protein: float


class GoalsModel(ApiModel):
    """Daily goals on the wire."""

    calories: float = Field(gt=0)
    fat_percentage: float = Field(ge=0, le=100)
    carbs_percentage: float = Field(ge=0, le=100)
    protein_percentage: float = Field(ge=0, le=100)

    def to_goals(self) -> DailyGoals:
        """Return the domain model."""
        return DailyGoals(**self.model_dump())


class MacroTargetsOut(ApiModel):
    """Gram targets derived from goals."""

    fat_g: int
    carbs_g: int
    protein_g: int


class GoalsOut(GoalsModel):
    """Daily goals with derived gram targets."""

    targets: MacroTargetsOut


class RebalanceIn(ApiModel):
    """Request to change one macro percentage of the stored goals."""

    macro: Literal["fat", "carbs", "protein"]
    value: float
