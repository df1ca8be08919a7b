"""Helpers for editing daily goals."""

import math
from dataclasses import replace
from typing import Literal

from food_journal.domain.goals import DailyGoals, MacroTargets

PercentageField = Literal["fat_percentage", "carbs_percentage", "protein_percentage"]

PERCENTAGE_FIELDS: tuple[PercentageField, ...] = (
    "fat_percentage",
    "carbs_percentage",
    "protein_percentage",
)

FAT_KCAL_PER_GRAM = 9
CARBS_KCAL_PER_GRAM = 4
PROTEIN_KCAL_PER_GRAM = 4


def rebalance_goals(
    goals: DailyGoals, field: PercentageField, value: float
) -> DailyGoals:
    """Set one macro percentage and rescale the other two to keep 100%.

    The edited value is clamped to [0, 100]. The other two keep their prior
    relative weights and are rounded to one decimal.
    """
    if field not in PERCENTAGE_FIELDS:
        raise ValueError(f"Unknown percentage field: {field}")
    edited = max(0.0, min(100.0, float(value)))
    others = [name for name in PERCENTAGE_FIELDS if name != field]
    remaining = 100 - edited
    others_total = sum(getattr(goals, name) for name in others)
    updates: dict[str, float] = {field: edited}
    for name in others:
        if others_total > 0:
            rescaled = getattr(goals, name) * (remaining / others_total)
        else:
            rescaled = remaining / len(others)
        updates[name] = round(rescaled, 1)
    return replace(goals, **updates)


def macro_targets(goals: DailyGoals) -> MacroTargets:
    """Convert percentage goals into whole-gram targets."""
    return MacroTargets(
        fat_g=_grams(goals.calories, goals.fat_percentage, FAT_KCAL_PER_GRAM),
        carbs_g=_grams(goals.calories, goals.carbs_percentage, CARBS_KCAL_PER_GRAM),
        protein_g=_grams(
            goals.calories, goals.protein_percentage, PROTEIN_KCAL_PER_GRAM
        ),
    )


def _grams(calories: float, percentage: float, kcal_per_gram: int) -> int:
    # Halves round up.
    return math.floor(calories * percentage / 100 / kcal_per_gram + 0.5)
