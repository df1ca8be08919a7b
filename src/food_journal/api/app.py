"""FastAPI application factory."""

import logging
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from food_journal.api.models import (
    CartLogIn,
    CartRecipeIn,
    DailyTotalsOut,
    DayNutrientOut,
    DayOut,
    FoodIn,
    FoodLogIn,
    FoodOut,
    GoalsModel,
    GoalsOut,
    IdOut,
    IdsOut,
    LogIn,
    MacroTargetsOut,
    RebalanceIn,
    RecipeIn,
    RecipeLogIn,
    RecipeOut,
    WeekOut,
)
from food_journal.app_logging import configure_logging
from food_journal.containers import AppContainer
from food_journal.domain.errors import RecordNotFoundError
from food_journal.domain.goals import DailyGoals
from food_journal.domain.logs import MealTime
from food_journal.services.cart import current_time_logged, meal_time_for_hour
from food_journal.services.goals import macro_targets, rebalance_goals
from food_journal.services.stats import day_totals


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(
        request: Request, exc: RecordNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(sqlite3.Error)
    async def storage_error_handler(
        request: Request, exc: sqlite3.Error
    ) -> JSONResponse:
        logger.error("Storage failure: path=%s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage failure"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def list_foods(request: Request) -> list[FoodOut]:
        """Return foods, pinned first."""
        store = request.app.state.container.store
        return [FoodOut.model_validate(food) for food in store.list_foods()]

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def add_food(payload: FoodIn, request: Request) -> IdOut:
        """Create a food."""
        store = request.app.state.container.store
        return IdOut(id=store.add_food(payload.to_new_food()))

    @app.put("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def update_food(food_id: int, payload: FoodIn, request: Request) -> None:
        """Replace a food."""
        request.app.state.container.store.update_food(payload.to_food(food_id))

    @app.post("/foods/{food_id}/pin", status_code=status.HTTP_204_NO_CONTENT)
    async def toggle_food_pin(food_id: int, request: Request) -> None:
        """Flip a food's pinned flag."""
        request.app.state.container.store.toggle_food_pin(food_id)

    @app.get("/recipes")
    async def list_recipes(request: Request) -> list[RecipeOut]:
        """Return recipes, pinned first."""
        store = request.app.state.container.store
        return [RecipeOut.model_validate(recipe) for recipe in store.list_recipes()]

    @app.post("/recipes", status_code=status.HTTP_201_CREATED)
    async def add_recipe(payload: RecipeIn, request: Request) -> IdOut:
        """Create a recipe with caller-computed totals."""
        store = request.app.state.container.store
        return IdOut(id=store.add_recipe(payload.to_new_recipe()))

    @app.put("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def update_recipe(
        recipe_id: int, payload: RecipeIn, request: Request
    ) -> None:
        """Replace a recipe."""
        request.app.state.container.store.update_recipe(payload.to_recipe(recipe_id))

    @app.post("/recipes/{recipe_id}/pin", status_code=status.HTTP_204_NO_CONTENT)
    async def toggle_recipe_pin(recipe_id: int, request: Request) -> None:
        """Flip a recipe's pinned flag."""
        request.app.state.container.store.toggle_recipe_pin(recipe_id)

    @app.post("/logs/food", status_code=status.HTTP_201_CREATED)
    async def log_food(payload: FoodLogIn, request: Request) -> IdOut:
        """Log an amount of a food."""
        store = request.app.state.container.store
        time_logged, time_of_day = _log_time(payload)
        log_id = store.log_food(
            food_id=payload.food_id,
            date=payload.date,
            amount=payload.amount,
            time_logged=time_logged,
            time_of_day=time_of_day,
        )
        return IdOut(id=log_id)

    @app.post("/logs/recipe", status_code=status.HTTP_201_CREATED)
    async def log_recipe(payload: RecipeLogIn, request: Request) -> IdOut:
        """Log servings of a recipe."""
        store = request.app.state.container.store
        time_logged, time_of_day = _log_time(payload)
        log_id = store.log_recipe(
            recipe_id=payload.recipe_id,
            date=payload.date,
            amount=payload.amount,
            time_logged=time_logged,
            time_of_day=time_of_day,
        )
        return IdOut(id=log_id)

    @app.delete("/logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_log(log_id: int, request: Request) -> None:
        """Delete a log entry."""
        request.app.state.container.store.delete_log(log_id)

    @app.post("/cart/log", status_code=status.HTTP_201_CREATED)
    async def log_cart(payload: CartLogIn, request: Request) -> IdsOut:
        """Log every item of a cart with one timestamp."""
        state_container: AppContainer = request.app.state.container
        time_logged, time_of_day = _log_time(payload)
        log_ids = state_container.cart_service.log_cart(
            date=payload.date,
            items=[item.to_item() for item in payload.items],
            time_logged=time_logged,
            time_of_day=time_of_day,
        )
        return IdsOut(ids=log_ids)

    @app.post("/cart/recipe", status_code=status.HTTP_201_CREATED)
    async def save_cart_recipe(payload: CartRecipeIn, request: Request) -> IdOut:
        """Save a cart of foods as a recipe."""
        state_container: AppContainer = request.app.state.container
        try:
            recipe_id = state_container.cart_service.save_as_recipe(
                payload.name, [item.to_item() for item in payload.items]
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return IdOut(id=recipe_id)

    @app.get("/days/{day}")
    async def get_day(day: str, request: Request) -> DayOut:
        """Return a day's resolved entries and totals."""
        state_container: AppContainer = request.app.state.container
        _require_date(day)
        entries = state_container.store.day_nutrients(day)
        totals = day_totals(day, entries)
        return DayOut(
            date=day,
            entries=[DayNutrientOut.model_validate(entry) for entry in entries],
            totals=DailyTotalsOut.model_validate(totals),
        )

    @app.get("/weeks/{end_day}")
    async def get_week(end_day: str, request: Request) -> WeekOut:
        """Return totals for the seven days ending on ``end_day``."""
        state_container: AppContainer = request.app.state.container
        _require_date(end_day)
        return WeekOut.model_validate(state_container.stats_service.get_week(end_day))

    @app.get("/goals")
    async def get_goals(request: Request) -> GoalsOut:
        """Return daily goals and gram targets."""
        return _goals_out(request.app.state.container.store.get_daily_goals())

    @app.put("/goals")
    async def update_goals(payload: GoalsModel, request: Request) -> GoalsOut:
        """Overwrite daily goals."""
        goals = payload.to_goals()
        request.app.state.container.store.update_daily_goals(goals)
        return _goals_out(goals)

    @app.post("/goals/rebalance")
    async def rebalance(payload: RebalanceIn, request: Request) -> GoalsOut:
        """Preview goals with one percentage changed and the others rescaled."""
        goals = request.app.state.container.store.get_daily_goals()
        return _goals_out(
            rebalance_goals(goals, f"{payload.macro}_percentage", payload.value)
        )

    return app


def _log_time(payload: LogIn | CartLogIn) -> tuple[str, MealTime]:
    """Fill in the log time and meal-time slot when the caller omits them."""
    time_logged = payload.time_logged or current_time_logged()
    time_of_day = payload.time_of_day or meal_time_for_hour(
        datetime.now().astimezone().hour
    )
    return time_logged, time_of_day


def _require_date(value: str) -> None:
    try:
        datetime.strptime(value, "%Y-%m-%d")  # noqa: DTZ007
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid date: {value}",
        ) from exc


def _goals_out(goals: DailyGoals) -> GoalsOut:
    targets = macro_targets(goals)
    return GoalsOut(
        calories=goals.calories,
        fat_percentage=goals.fat_percentage,
        carbs_percentage=goals.carbs_percentage,
        protein_percentage=goals.protein_percentage,
        targets=MacroTargetsOut.model_validate(targets),
    )
