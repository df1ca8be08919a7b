"""Cart of pending items: totals, bulk logging and saving as a recipe."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from food_journal.domain.foods import Food, NewRecipe, Recipe, RecipeItem
from food_journal.domain.logs import MealTime
from food_journal.services.store import NutritionStore

_logger = logging.getLogger(__name__)

BREAKFAST_BEFORE_HOUR = 10
AM_SNACK_BEFORE_HOUR = 11
LUNCH_BEFORE_HOUR = 14
PM_SNACK_BEFORE_HOUR = 17
DINNER_BEFORE_HOUR = 21


@dataclass(frozen=True)
class CartItem:
    """A food amount or a recipe serving count waiting to be logged."""

    amount: float
    food_id: int | None = None
    recipe_id: int | None = None

    def __post_init__(self) -> None:
        if (self.food_id is None) == (self.recipe_id is None):
            raise ValueError("A cart item needs exactly one of food_id or recipe_id")


@dataclass(frozen=True)
class CartLine:
    """A cart item resolved against its food or recipe."""

    item: CartItem
    name: str
    calories: float
    fat: float
    carbs: float
    protein: float


@dataclass(frozen=True)
class CartTotals:
    """Summed macros of resolved cart lines."""

    calories: float
    fat: float
    carbs: float
    protein: float


def resolve_cart(
    items: Iterable[CartItem], foods: Iterable[Food], recipes: Iterable[Recipe]
) -> list[CartLine]:
    """Resolve cart items, skipping those whose food or recipe is gone."""
    foods_by_id = {food.id: food for food in foods}
    recipes_by_id = {recipe.id: recipe for recipe in recipes}
    lines: list[CartLine] = []
    for item in items:
        if item.recipe_id is not None:
            recipe = recipes_by_id.get(item.recipe_id)
            if recipe is None:
                continue
            lines.append(
                CartLine(
                    item=item,
                    name=recipe.name,
                    calories=recipe.total_calories * item.amount,
                    fat=recipe.total_fat * item.amount,
                    carbs=recipe.total_carbs * item.amount,
                    protein=recipe.total_protein * item.amount,
                )
            )
            continue
        food = foods_by_id.get(item.food_id)
        if food is None:
            continue
        multiplier = item.amount / food.serving_size
        lines.append(
            CartLine(
                item=item,
                name=food.name,
                calories=food.calories * multiplier,
                fat=food.fat * multiplier,
                carbs=food.carbs * multiplier,
                protein=food.protein * multiplier,
            )
        )
    return lines


def cart_totals(lines: Iterable[CartLine]) -> CartTotals:
    """Sum the macros of resolved cart lines."""
    lines = list(lines)
    return CartTotals(
        calories=sum(line.calories for line in lines),
        fat=sum(line.fat for line in lines),
        carbs=sum(line.carbs for line in lines),
        protein=sum(line.protein for line in lines),
    )


def meal_time_for_hour(hour: int) -> MealTime:
    """Suggest a meal-time slot for an hour of the day."""
    if hour < BREAKFAST_BEFORE_HOUR:
        return MealTime.BREAKFAST
    if hour < AM_SNACK_BEFORE_HOUR:
        return MealTime.AM_SNACK
    if hour < LUNCH_BEFORE_HOUR:
        return MealTime.LUNCH
    if hour < PM_SNACK_BEFORE_HOUR:
        return MealTime.PM_SNACK
    if hour < DINNER_BEFORE_HOUR:
        return MealTime.DINNER
    return MealTime.LATE_SNACK


def current_time_logged(now: datetime | None = None) -> str:
    """Return the UTC time of day as ``HH:MM:SS``."""
    moment = now or datetime.now(tz=UTC)
    return moment.astimezone(UTC).strftime("%H:%M:%S")


@dataclass
class CartService:
    """Logs carts and turns them into recipes."""

    store: NutritionStore

    def preview(self, items: list[CartItem]) -> tuple[list[CartLine], CartTotals]:
        """Resolve a cart against current foods and recipes."""
        lines = resolve_cart(items, self.store.list_foods(), self.store.list_recipes())
        return lines, cart_totals(lines)

    def log_cart(
        self,
        date: str,
        items: list[CartItem],
        time_logged: str,
        time_of_day: MealTime,
    ) -> list[int]:
        """Log every cart item with one shared timestamp and slot."""
        log_ids = []
        for item in items:
            if item.recipe_id is not None:
                log_id = self.store.log_recipe(
                    recipe_id=item.recipe_id,
                    date=date,
                    amount=item.amount,
                    time_logged=time_logged,
                    time_of_day=time_of_day,
                )
            else:
                log_id = self.store.log_food(
                    food_id=item.food_id,
                    date=date,
                    amount=item.amount,
                    time_logged=time_logged,
                    time_of_day=time_of_day,
                )
            log_ids.append(log_id)
        _logger.info("Cart logged: date=%s items=%s", date, len(log_ids))
        return log_ids

    def save_as_recipe(self, name: str, items: list[CartItem]) -> int:
        """Store the cart's foods as a recipe with totals computed now."""
        if not name.strip():
            raise ValueError("Recipe name must not be empty")
        if any(item.recipe_id is not None for item in items):
            raise ValueError("Recipes can only be built from foods")
        lines = resolve_cart(items, self.store.list_foods(), [])
        totals = cart_totals(lines)
        return self.store.add_recipe(
            NewRecipe(
                name=name,
                items=tuple(
                    RecipeItem(food_id=item.food_id, amount=item.amount)
                    for item in items
                ),
                total_calories=totals.calories,
                total_fat=totals.fat,
                total_carbs=totals.carbs,
                total_protein=totals.protein,
            )
        )
