"""SQLite repository for foods."""

import sqlite3
from dataclasses import asdict, dataclass

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.domain.foods import Food, NewFood
from food_journal.services.store import FoodRepository

_COLUMNS = (
    "name",
    "calories",
    "fat",
    "carbs",
    "protein",
    "serving_size",
    "serving_unit",
    "cholesterol",
    "sodium",
    "potassium",
    "is_custom",
    "is_pinned",
)


@dataclass
class SqliteFoodRepository(FoodRepository):
    """SQLite-backed repository for foods."""

    database: SqliteDatabase

    def list_foods(self) -> list[Food]:
        """Return all foods in id order."""
        rows = (
            self.database.connection()
            .execute("SELECT * FROM foods ORDER BY id")
            .fetchall()
        )
        return [_parse_food(row) for row in rows]

    def get_food(self, food_id: int) -> Food | None:
        """Return a food by id, if present."""
        row = (
            self.database.connection()
            .execute("SELECT * FROM foods WHERE id = ?", (food_id,))
            .fetchone()
        )
        if row is None:
            return None
        return _parse_food(row)

    def create_food(self, food: NewFood) -> int:
        """Insert a food and return its new id."""
        conn = self.database.connection()
        columns = ", ".join(_COLUMNS)
        placeholders = ", ".join(f":{column}" for column in _COLUMNS)
        with conn:
            cursor = conn.execute(
                f"INSERT INTO foods ({columns}) VALUES ({placeholders})",  # noqa: S608
                asdict(food),
            )
        return int(cursor.lastrowid)

    def replace_food(self, food: Food) -> bool:
        """Overwrite a food row, returning False when the id is absent."""
        conn = self.database.connection()
        assignments = ", ".join(f"{column} = :{column}" for column in _COLUMNS)
        with conn:
            cursor = conn.execute(
                f"UPDATE foods SET {assignments} WHERE id = :id",  # noqa: S608
                asdict(food),
            )
        return cursor.rowcount > 0

    def delete_food(self, food_id: int) -> None:
        """Delete a food if present."""
        conn = self.database.connection()
        with conn:
            conn.execute("DELETE FROM foods WHERE id = ?", (food_id,))


def _parse_food(row: sqlite3.Row) -> Food:
    """Parse a foods row into a domain model."""
    return Food(
        id=int(row["id"]),
        name=str(row["name"]),
        calories=float(row["calories"]),
        fat=float(row["fat"]),
        carbs=float(row["carbs"]),
        protein=float(row["protein"]),
        serving_size=float(row["serving_size"]),
        serving_unit=str(row["serving_unit"]),
        cholesterol=_optional_float(row["cholesterol"]),
        sodium=_optional_float(row["sodium"]),
        potassium=_optional_float(row["potassium"]),
        is_custom=bool(row["is_custom"]),
        is_pinned=bool(row["is_pinned"]),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
