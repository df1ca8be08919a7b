"""Shared test fixtures."""

from dataclasses import dataclass, field, fields
from itertools import count

import pytest

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.config import Settings
from food_journal.containers import AppContainer, build_store
from food_journal.domain.foods import Food, NewFood, NewRecipe, Recipe
from food_journal.domain.goals import DailyGoals
from food_journal.domain.logs import FoodLog, NewFoodLog
from food_journal.services.cart import CartService
from food_journal.services.stats import StatsService
from food_journal.services.store import (
    FoodLogRepository,
    FoodRepository,
    GoalsRepository,
    NutritionStore,
    RecipeRepository,
)


def _with_id(record: object, record_id: int, model: type) -> object:
    values = {item.name: getattr(record, item.name) for item in fields(record)}
    return model(id=record_id, **values)


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[int, Food] = field(default_factory=dict)
    ids: count = field(default_factory=lambda: count(1))

    def list_foods(self) -> list[Food]:
        return [self.foods[food_id] for food_id in sorted(self.foods)]

    def get_food(self, food_id: int) -> Food | None:
        return self.foods.get(food_id)

    def create_food(self, food: NewFood) -> int:
        food_id = next(self.ids)
        self.foods[food_id] = _with_id(food, food_id, Food)
        return food_id

    def replace_food(self, food: Food) -> bool:
        if food.id not in self.foods:
            return False
        self.foods[food.id] = food
        return True

    def delete_food(self, food_id: int) -> None:
        self.foods.pop(food_id, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[int, Recipe] = field(default_factory=dict)
    ids: count = field(default_factory=lambda: count(1))

    def list_recipes(self) -> list[Recipe]:
        return [self.recipes[recipe_id] for recipe_id in sorted(self.recipes)]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def create_recipe(self, recipe: NewRecipe) -> int:
        recipe_id = next(self.ids)
        self.recipes[recipe_id] = _with_id(recipe, recipe_id, Recipe)
        return recipe_id

    def replace_recipe(self, recipe: Recipe) -> bool:
        if recipe.id not in self.recipes:
            return False
        self.recipes[recipe.id] = recipe
        return True

    def delete_recipe(self, recipe_id: int) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    logs: dict[int, FoodLog] = field(default_factory=dict)
    ids: count = field(default_factory=lambda: count(1))

    def create_log(self, log: NewFoodLog) -> int:
        log_id = next(self.ids)
        self.logs[log_id] = _with_id(log, log_id, FoodLog)
        return log_id

    def list_logs_for_date(self, date: str) -> list[FoodLog]:
        return [
            self.logs[log_id]
            for log_id in sorted(self.logs)
            if self.logs[log_id].date == date
        ]

    def delete_log(self, log_id: int) -> None:
        self.logs.pop(log_id, None)


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory goals repository for tests."""

    goals: DailyGoals | None = None

    def get_goals(self) -> DailyGoals | None:
        return self.goals

    def put_goals(self, goals: DailyGoals) -> None:
        self.goals = goals


def make_food(name: str = "Oats", **overrides: object) -> NewFood:
    values: dict[str, object] = {
        "name": name,
        "calories": 389,
        "fat": 6.9,
        "carbs": 66.3,
        "protein": 16.9,
        "serving_size": 100,
        "serving_unit": "g",
        "is_custom": True,
    }
    values.update(overrides)
    return NewFood(**values)


def make_recipe(name: str = "Stew", **overrides: object) -> NewRecipe:
    values: dict[str, object] = {
        "name": name,
        "items": (),
        "total_calories": 400,
        "total_fat": 10,
        "total_carbs": 50,
        "total_protein": 30,
    }
    values.update(overrides)
    return NewRecipe(**values)


@pytest.fixture
def store() -> NutritionStore:
    return NutritionStore(
        foods=InMemoryFoodRepository(),
        recipes=InMemoryRecipeRepository(),
        logs=InMemoryFoodLogRepository(),
        goals=InMemoryGoalsRepository(),
    )


@pytest.fixture
def database(tmp_path) -> SqliteDatabase:
    db = SqliteDatabase(tmp_path / "journal.db")
    yield db
    db.close()


@pytest.fixture
def sqlite_store(database: SqliteDatabase) -> NutritionStore:
    return build_store(database)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_path=str(tmp_path / "app.db"))


@pytest.fixture
def container(settings: Settings, store: NutritionStore) -> AppContainer:
    def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        stats_service=StatsService(store),
        cart_service=CartService(store),
        close_resources=close_resources,
    )
