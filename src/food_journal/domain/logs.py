"""Domain models for logged consumption events."""

from dataclasses import dataclass
from enum import Enum


class MealTime(Enum):
    """Fixed meal-time slots, declared in the order a day is displayed."""

    BREAKFAST = "breakfast"
    AM_SNACK = "amSnack"
    LUNCH = "lunch"
    PM_SNACK = "pmSnack"
    DINNER = "dinner"
    LATE_SNACK = "lateSnack"


MEAL_TIME_ORDER: dict[MealTime, int] = {
    meal_time: index for index, meal_time in enumerate(MealTime)
}


@dataclass(frozen=True)
class NewFoodLog:
    """A consumption event before the store assigns an id.

    Exactly one of ``food_id`` and ``recipe_id`` must be set. For foods the
    amount is in the food's serving units; for recipes it is a serving count.
    """

    date: str
    amount: float
    time_logged: str
    time_of_day: MealTime
    food_id: int | None = None
    recipe_id: int | None = None

    def __post_init__(self) -> None:
        _check_reference(self.food_id, self.recipe_id)

    @property
    def is_recipe(self) -> bool:
        """Return True when the log refers to a recipe."""
        return self.recipe_id is not None


@dataclass(frozen=True)
class FoodLog:
    """A persisted consumption event."""

    id: int
    date: str
    amount: float
    time_logged: str
    time_of_day: MealTime
    food_id: int | None = None
    recipe_id: int | None = None

    def __post_init__(self) -> None:
        _check_reference(self.food_id, self.recipe_id)

    @property
    def is_recipe(self) -> bool:
        """Return True when the log refers to a recipe."""
        return self.recipe_id is not None


@dataclass(frozen=True)
class DayNutrient:
    """A log entry resolved against its food or recipe."""

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


def _check_reference(food_id: int | None, recipe_id: int | None) -> None:
    if (food_id is None) == (recipe_id is None):
        raise ValueError("A food log needs exactly one of food_id or recipe_id")
