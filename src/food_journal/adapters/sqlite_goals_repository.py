"""SQLite repository for daily goals."""

from dataclasses import dataclass

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.domain.goals import DailyGoals
from food_journal.services.store import GoalsRepository

GOALS_KEY = "current"


@dataclass
class SqliteGoalsRepository(GoalsRepository):
    """SQLite implementation for the daily goals singleton."""

    database: SqliteDatabase

    def get_goals(self) -> DailyGoals | None:
        """Return the stored goals, if any."""
        row = (
            self.database.connection()
            .execute("SELECT * FROM daily_goals WHERE key = ?", (GOALS_KEY,))
            .fetchone()
        )
        if row is None:
            return None
        return DailyGoals(
            calories=float(row["calories"]),
            fat_percentage=float(row["fat_percentage"]),
            carbs_percentage=float(row["carbs_percentage"]),
            protein_percentage=float(row["protein_percentage"]),
        )

    def put_goals(self, goals: DailyGoals) -> None:
        """Overwrite the stored goals."""
        conn = self.database.connection()
        with conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO daily_goals (
                    key, calories, fat_percentage, carbs_percentage,
                    protein_percentage
                )
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    GOALS_KEY,
                    goals.calories,
                    goals.fat_percentage,
                    goals.carbs_percentage,
                    goals.protein_percentage,
                ),
            )
