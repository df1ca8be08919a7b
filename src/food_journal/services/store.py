"""Nutrition store: record collections plus derived day nutrients."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol, TypeVar

from food_journal.domain.errors import RecordNotFoundError
from food_journal.domain.foods import Food, NewFood, NewRecipe, Recipe
from food_journal.domain.goals import DEFAULT_DAILY_GOALS, DailyGoals
from food_journal.domain.logs import (
    MEAL_TIME_ORDER,
    DayNutrient,
    FoodLog,
    MealTime,
    NewFoodLog,
)

_logger = logging.getLogger(__name__)

_Pinnable = TypeVar("_Pinnable", Food, Recipe)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def list_foods(self) -> list[Food]:
        """Return all foods in id order."""

    def get_food(self, food_id: int) -> Food | None:
        """Return a food by id, if present."""

    def create_food(self, food: NewFood) -> int:
        """Insert a food and return its new id."""

    def replace_food(self, food: Food) -> bool:
        """Overwrite a food row, returning False when the id is absent."""

    def delete_food(self, food_id: int) -> None:
        """Delete a food if present."""


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes in id order."""

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""

    def create_recipe(self, recipe: NewRecipe) -> int:
        """Insert a recipe and return its new id."""

    def replace_recipe(self, recipe: Recipe) -> bool:
        """Overwrite a recipe row, returning False when the id is absent."""

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe if present."""


class FoodLogRepository(Protocol):
    """Persistence interface for food logs."""

    def create_log(self, log: NewFoodLog) -> int:
        """Insert a log and return its new id."""

    def list_logs_for_date(self, date: str) -> list[FoodLog]:
        """Return the logs recorded for a calendar day in id order."""

    def delete_log(self, log_id: int) -> None:
        """Delete a log if present."""


class GoalsRepository(Protocol):
    """Persistence interface for the daily goals singleton."""

    def get_goals(self) -> DailyGoals | None:
        """Return the stored goals, if any."""

    def put_goals(self, goals: DailyGoals) -> None:
        """Overwrite the stored goals."""


@dataclass
class NutritionStore:
    """Owns foods, recipes, logs and goals and resolves logged days.

    The store trusts its callers: it persists values as given and leaves
    validation to the layer that collects the input.
    """

    foods: FoodRepository
    recipes: RecipeRepository
    logs: FoodLogRepository
    goals: GoalsRepository

    def list_foods(self) -> list[Food]:
        """Return all foods, pinned first."""
        return pinned_first(self.foods.list_foods())

    def get_food(self, food_id: int) -> Food | None:
        """Return a food by id, if present."""
        return self.foods.get_food(food_id)

    def add_food(self, food: NewFood) -> int:
        """Store a new food and return its id."""
        food_id = self.foods.create_food(food)
        _logger.info("Food added: id=%s name=%s", food_id, food.name)
        return food_id

    def update_food(self, food: Food) -> None:
        """Replace a food by id."""
        if not self.foods.replace_food(food):
            raise RecordNotFoundError("food", food.id)

    def toggle_food_pin(self, food_id: int) -> None:
        """Flip the pinned flag of a food; unknown ids are ignored."""
        food = self.foods.get_food(food_id)
        if food is None:
            return
        self.foods.replace_food(replace(food, is_pinned=not food.is_pinned))

    def delete_food(self, food_id: int) -> None:
        """Delete a food; logs and recipes that reference it are kept."""
        self.foods.delete_food(food_id)

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes, pinned first."""
        return pinned_first(self.recipes.list_recipes())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""
        return self.recipes.get_recipe(recipe_id)

    def add_recipe(self, recipe: NewRecipe) -> int:
        """Store a new recipe and return its id."""
        recipe_id = self.recipes.create_recipe(recipe)
        _logger.info("Recipe added: id=%s name=%s", recipe_id, recipe.name)
        return recipe_id

    def update_recipe(self, recipe: Recipe) -> None:
        """Replace a recipe by id."""
        if not self.recipes.replace_recipe(recipe):
            raise RecordNotFoundError("recipe", recipe.id)

    def toggle_recipe_pin(self, recipe_id: int) -> None:
        """Flip the pinned flag of a recipe; unknown ids are ignored."""
        recipe = self.recipes.get_recipe(recipe_id)
        if recipe is None:
            return
        self.recipes.replace_recipe(replace(recipe, is_pinned=not recipe.is_pinned))

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe; logs that reference it are kept."""
        self.recipes.delete_recipe(recipe_id)

    def log_food(  # noqa: PLR0913
        self,
        food_id: int,
        date: str,
        amount: float,
        time_logged: str,
        time_of_day: MealTime,
    ) -> int:
        """Log an amount of a food, in the food's serving units."""
        return self.logs.create_log(
            NewFoodLog(
                food_id=food_id,
                date=date,
                amount=amount,
                time_logged=time_logged,
                time_of_day=MealTime(time_of_day),
            )
        )

    def log_recipe(  # noqa: PLR0913
        self,
        recipe_id: int,
        date: str,
        amount: float,
        time_logged: str,
        time_of_day: MealTime,
    ) -> int:
        """Log a number of servings of a recipe."""
        return self.logs.create_log(
            NewFoodLog(
                recipe_id=recipe_id,
                date=date,
                amount=amount,
                time_logged=time_logged,
                time_of_day=MealTime(time_of_day),
            )
        )

    def delete_log(self, log_id: int) -> None:
        """Delete a log entry; unknown ids are ignored."""
        self.logs.delete_log(log_id)

    def day_nutrients(self, date: str) -> list[DayNutrient]:
        """Resolve a day's logs into nutrient rows ordered by meal time."""
        logs = self.logs.list_logs_for_date(date)
        foods = {food.id: food for food in self.foods.list_foods()}
        recipes = {recipe.id: recipe for recipe in self.recipes.list_recipes()}
        rows = [
            row
            for row in (resolve_or_skip(log, foods, recipes) for log in logs)
            if row is not None
        ]
        return sorted(rows, key=lambda row: MEAL_TIME_ORDER[row.time_of_day])

    def get_daily_goals(self) -> DailyGoals:
        """Return the stored goals or the defaults when unset."""
        return self.goals.get_goals() or DEFAULT_DAILY_GOALS

    def update_daily_goals(self, goals: DailyGoals) -> None:
        """Overwrite the daily goals."""
        self.goals.put_goals(goals)


def pinned_first(items: list[_Pinnable]) -> list[_Pinnable]:
    """Move pinned items ahead of unpinned ones, keeping relative order."""
    return sorted(items, key=lambda item: not item.is_pinned)


def resolve_or_skip(
    log: FoodLog, foods: dict[int, Food], recipes: dict[int, Recipe]
) -> DayNutrient | None:
    """Resolve a log against current foods and recipes.

    Returns None when the referenced record no longer exists.
    """
    if log.recipe_id is not None:
        recipe = recipes.get(log.recipe_id)
        if recipe is None:
            _logger.debug("Skipping log %s: recipe %s missing", log.id, log.recipe_id)
            return None
        return DayNutrient(
            id=log.id,
            name=recipe.name,
            calories=recipe.total_calories * log.amount,
            fat=recipe.total_fat * log.amount,
            carbs=recipe.total_carbs * log.amount,
            protein=recipe.total_protein * log.amount,
            amount=log.amount,
            time_logged=log.time_logged,
            time_of_day=log.time_of_day,
            is_recipe=True,
        )
    food = foods.get(log.food_id) if log.food_id is not None else None
    if food is None:
        _logger.debug("Skipping log %s: food %s missing", log.id, log.food_id)
        return None
    multiplier = log.amount / food.serving_size
    return DayNutrient(
        id=log.id,
        name=food.name,
        calories=food.calories * multiplier,
        fat=food.fat * multiplier,
        carbs=food.carbs * multiplier,
        protein=food.protein * multiplier,
        amount=log.amount,
        time_logged=log.time_logged,
        time_of_day=log.time_of_day,
        is_recipe=False,
    )
