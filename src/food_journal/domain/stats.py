"""Domain models for statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    date: str
    calories: float
    fat: float
    carbs: float
    protein: float


@dataclass(frozen=True)
class WeekSummary:
    """Totals for seven consecutive days, oldest first, with averages."""

    days: list[DailyTotals]
    avg_calories: float
    avg_fat: float
    avg_carbs: float
    avg_protein: float
