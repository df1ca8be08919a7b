"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.adapters.sqlite_food_log_repository import SqliteFoodLogRepository
from food_journal.adapters.sqlite_food_repository import SqliteFoodRepository
from food_journal.adapters.sqlite_goals_repository import SqliteGoalsRepository
from food_journal.adapters.sqlite_recipe_repository import SqliteRecipeRepository
from food_journal.config import Settings
from food_journal.services.cart import CartService
from food_journal.services.stats import StatsService
from food_journal.services.store import NutritionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: NutritionStore
    stats_service: StatsService
    cart_service: CartService
    close_resources: Callable[[], None]


def build_store(database: SqliteDatabase) -> NutritionStore:
    """Create a nutrition store backed by one SQLite database."""
    return NutritionStore(
        foods=SqliteFoodRepository(database),
        recipes=SqliteRecipeRepository(database),
        logs=SqliteFoodLogRepository(database),
        goals=SqliteGoalsRepository(database),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    database = SqliteDatabase(resolved_settings.database_path)
    store = build_store(database)
    return AppContainer(
        settings=resolved_settings,
        store=store,
        stats_service=StatsService(store),
        cart_service=CartService(store),
        close_resources=database.close,
    )
