"""SQLite repository for food logs."""

import sqlite3
from dataclasses import dataclass

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.domain.logs import FoodLog, MealTime, NewFoodLog
from food_journal.services.store import FoodLogRepository


@dataclass
class SqliteFoodLogRepository(FoodLogRepository):
    """SQLite-backed repository for food logs."""

    database: SqliteDatabase

    def create_log(self, log: NewFoodLog) -> int:
        """Insert a log and return its new id."""
        conn = self.database.connection()
        with conn:
            cursor = conn.execute(
                """
                INSERT INTO food_logs (
                    food_id, recipe_id, date, amount, time_logged, time_of_day
                )
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    log.food_id,
                    log.recipe_id,
                    log.date,
                    log.amount,
                    log.time_logged,
                    log.time_of_day.value,
                ),
            )
        return int(cursor.lastrowid)

    def list_logs_for_date(self, date: str) -> list[FoodLog]:
        """Return the logs recorded for a calendar day in id order."""
        rows = (
            self.database.connection()
            .execute("SELECT * FROM food_logs WHERE date = ? ORDER BY id", (date,))
            .fetchall()
        )
        return [_parse_log(row) for row in rows]

    def delete_log(self, log_id: int) -> None:
        """Delete a log if present."""
        conn = self.database.connection()
        with conn:
            conn.execute("DELETE FROM food_logs WHERE id = ?", (log_id,))


def _parse_log(row: sqlite3.Row) -> FoodLog:
    food_id = row["food_id"]
    recipe_id = row["recipe_id"]
    return FoodLog(
        id=int(row["id"]),
        food_id=int(food_id) if food_id is not None else None,
        recipe_id=int(recipe_id) if recipe_id is not None else None,
        date=str(row["date"]),
        amount=float(row["amount"]),
        time_logged=str(row["time_logged"]),
        time_of_day=MealTime(row["time_of_day"]),
    )
