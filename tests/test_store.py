"""Tests for the nutrition store."""

from dataclasses import asdict, replace

import pytest

from food_journal.domain.errors import RecordNotFoundError
from food_journal.domain.foods import Food
from food_journal.domain.goals import DailyGoals
from food_journal.domain.logs import MealTime
from food_journal.services.store import NutritionStore
from tests.conftest import make_food, make_recipe

DAY = "2024-03-10"


def test_list_foods_puts_pinned_first_and_keeps_order(store: NutritionStore) -> None:
    ids = [store.add_food(make_food(name)) for name in ("A", "B", "C", "D")]
    store.toggle_food_pin(ids[2])
    store.toggle_food_pin(ids[3])

    names = [food.name for food in store.list_foods()]

    assert names == ["C", "D", "A", "B"]


def test_list_recipes_puts_pinned_first(store: NutritionStore) -> None:
    first = store.add_recipe(make_recipe("Soup"))
    second = store.add_recipe(make_recipe("Salad"))
    store.toggle_recipe_pin(second)

    recipes = store.list_recipes()

    assert [recipe.id for recipe in recipes] == [second, first]


def test_add_food_round_trips(store: NutritionStore) -> None:
    new_food = make_food("Greek Yogurt", calories=59, sodium=36)

    food_id = store.add_food(new_food)

    assert store.list_foods() == [Food(id=food_id, **asdict(new_food))]


def test_toggle_food_pin_twice_restores_flag(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())

    store.toggle_food_pin(food_id)
    assert store.get_food(food_id).is_pinned is True
    store.toggle_food_pin(food_id)

    assert store.get_food(food_id).is_pinned is False


def test_toggle_pin_for_missing_ids_is_noop(store: NutritionStore) -> None:
    store.toggle_food_pin(99)
    store.toggle_recipe_pin(99)

    assert store.list_foods() == []
    assert store.list_recipes() == []


def test_update_food_replaces_row(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())
    food = store.get_food(food_id)

    store.update_food(replace(food, name="Rolled Oats", calories=370))

    updated = store.get_food(food_id)
    assert updated.name == "Rolled Oats"
    assert updated.calories == 370


def test_update_missing_records_raise_not_found(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())
    food = store.get_food(food_id)
    recipe = store.get_recipe(store.add_recipe(make_recipe()))

    with pytest.raises(RecordNotFoundError):
        store.update_food(replace(food, id=42))
    with pytest.raises(RecordNotFoundError):
        store.update_recipe(replace(recipe, id=42))


def test_day_nutrients_scales_food_by_serving_size(store: NutritionStore) -> None:
    food_id = store.add_food(make_food("Chicken", calories=165, fat=3.6, protein=31))
    store.log_food(food_id, DAY, 150, "12:00:00", MealTime.LUNCH)

    [row] = store.day_nutrients(DAY)

    assert row.calories == pytest.approx(247.5)
    assert row.fat == pytest.approx(5.4)
    assert row.protein == pytest.approx(46.5)
    assert row.name == "Chicken"
    assert row.amount == 150
    assert row.is_recipe is False


def test_day_nutrients_scales_recipe_by_servings(store: NutritionStore) -> None:
    recipe_id = store.add_recipe(make_recipe(total_calories=400, total_carbs=50))
    log_id = store.log_recipe(recipe_id, DAY, 1.5, "19:30:00", MealTime.DINNER)

    [row] = store.day_nutrients(DAY)

    assert row.id == log_id
    assert row.calories == pytest.approx(600)
    assert row.carbs == pytest.approx(75)
    assert row.is_recipe is True
    assert row.time_logged == "19:30:00"
    assert row.time_of_day == MealTime.DINNER


def test_day_nutrients_only_returns_requested_date(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())
    store.log_food(food_id, "2024-03-09", 100, "08:00:00", MealTime.BREAKFAST)
    today_id = store.log_food(food_id, DAY, 50, "08:00:00", MealTime.BREAKFAST)
    store.log_food(food_id, "2024-03-11", 100, "08:00:00", MealTime.BREAKFAST)

    rows = store.day_nutrients(DAY)

    assert [row.id for row in rows] == [today_id]


def test_day_nutrients_orders_by_meal_time(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())
    dinner = store.log_food(food_id, DAY, 100, "19:00:00", MealTime.DINNER)
    breakfast = store.log_food(food_id, DAY, 100, "08:00:00", MealTime.BREAKFAST)
    lunch = store.log_food(food_id, DAY, 100, "12:00:00", MealTime.LUNCH)
    second_breakfast = store.log_food(food_id, DAY, 20, "09:00:00", MealTime.BREAKFAST)

    rows = store.day_nutrients(DAY)

    assert [row.id for row in rows] == [breakfast, second_breakfast, lunch, dinner]


def test_day_nutrients_skips_deleted_references(store: NutritionStore) -> None:
    kept = store.add_food(make_food("Kept"))
    removed = store.add_food(make_food("Removed"))
    recipe_id = store.add_recipe(make_recipe())
    store.log_food(kept, DAY, 100, "08:00:00", MealTime.BREAKFAST)
    store.log_food(removed, DAY, 100, "08:00:00", MealTime.BREAKFAST)
    store.log_recipe(recipe_id, DAY, 1, "12:00:00", MealTime.LUNCH)

    store.delete_food(removed)
    store.delete_recipe(recipe_id)

    rows = store.day_nutrients(DAY)
    assert [row.name for row in rows] == ["Kept"]


def test_day_nutrients_uses_current_food_values(store: NutritionStore) -> None:
    food_id = store.add_food(make_food(calories=100))
    store.log_food(food_id, DAY, 100, "08:00:00", MealTime.BREAKFAST)

    store.update_food(replace(store.get_food(food_id), calories=200))

    [row] = store.day_nutrients(DAY)
    assert row.calories == pytest.approx(200)


def test_recipe_totals_are_not_recomputed(store: NutritionStore) -> None:
    food_id = store.add_food(make_food(calories=100))
    recipe_id = store.add_recipe(make_recipe(total_calories=100))
    store.log_recipe(recipe_id, DAY, 1, "12:00:00", MealTime.LUNCH)

    store.update_food(replace(store.get_food(food_id), calories=500))

    [row] = store.day_nutrients(DAY)
    assert row.calories == pytest.approx(100)


def test_delete_log_removes_entry_and_ignores_missing(store: NutritionStore) -> None:
    food_id = store.add_food(make_food())
    log_id = store.log_food(food_id, DAY, 100, "08:00:00", MealTime.BREAKFAST)

    store.delete_log(log_id)
    store.delete_log(log_id)

    assert store.day_nutrients(DAY) == []


def test_daily_goals_default_when_unset(store: NutritionStore) -> None:
    goals = store.get_daily_goals()

    assert goals == DailyGoals(
        calories=2000, fat_percentage=20, carbs_percentage=40, protein_percentage=40
    )


def test_update_daily_goals_overwrites(store: NutritionStore) -> None:
    goals = DailyGoals(
        calories=1800, fat_percentage=30, carbs_percentage=35, protein_percentage=35
    )

    store.update_daily_goals(goals)

    assert store.get_daily_goals() == goals
