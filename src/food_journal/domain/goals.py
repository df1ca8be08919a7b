"""Domain models for daily macro goals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyGoals:
    """Calorie goal and macro split in percent of calories."""

    calories: float
    fat_percentage: float
    carbs_percentage: float
    protein_percentage: float


DEFAULT_DAILY_GOALS = DailyGoals(
    calories=2000,
    fat_percentage=20,
    carbs_percentage=40,
    protein_percentage=40,
)


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in grams."""

    fat_g: int
    carbs_g: int
    protein_g: int
