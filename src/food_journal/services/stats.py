"""Statistics service for logged days."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from food_journal.domain.logs import DayNutrient
from food_journal.domain.stats import DailyTotals, WeekSummary
from food_journal.services.store import NutritionStore

WEEK_DAYS = 7

_logger = logging.getLogger(__name__)


@dataclass
class StatsService:
    """Service for computing day and week totals from the store."""

    store: NutritionStore

    def get_day(self, day: str) -> DailyTotals:
        """Return the totals for a single day."""
        return day_totals(day, self.store.day_nutrients(day))

    def get_week(self, end_day: str) -> WeekSummary:
        """Return totals for the seven days ending on ``end_day``."""
        end = date.fromisoformat(end_day)
        daily = []
        for offset in range(WEEK_DAYS - 1, -1, -1):
            day = (end - timedelta(days=offset)).isoformat()
            daily.append(self._safe_day(day))
        return _summarize(daily)

    def _safe_day(self, day: str) -> DailyTotals:
        try:
            return self.get_day(day)
        except Exception:
            _logger.exception("Failed to load day totals: date=%s", day)
            return DailyTotals(date=day, calories=0, fat=0, carbs=0, protein=0)


def day_totals(day: str, rows: Iterable[DayNutrient]) -> DailyTotals:
    """Sum resolved rows into daily totals."""
    total = DailyTotals(date=day, calories=0, fat=0, carbs=0, protein=0)
    for row in rows:
        total = DailyTotals(
            date=day,
            calories=total.calories + row.calories,
            fat=total.fat + row.fat,
            carbs=total.carbs + row.carbs,
            protein=total.protein + row.protein,
        )
    return total


def _summarize(daily: list[DailyTotals]) -> WeekSummary:
    total_days = max(len(daily), 1)
    return WeekSummary(
        days=daily,
        avg_calories=sum(day.calories for day in daily) / total_days,
        avg_fat=sum(day.fat for day in daily) / total_days,
        avg_carbs=sum(day.carbs for day in daily) / total_days,
        avg_protein=sum(day.protein for day in daily) / total_days,
    )
