"""SQLite database handle with lazy, versioned schema setup."""

import logging
import sqlite3
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

_logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

SEED_FOODS: tuple[dict[str, object], ...] = (
    {
        "name": "Chicken Breast",
        "calories": 165,
        "fat": 3.6,
        "carbs": 0,
        "protein": 31,
        "serving_size": 100,
        "serving_unit": "g",
    },
    {
        "name": "Brown Rice",
        "calories": 112,
        "fat": 0.9,
        "carbs": 23.5,
        "protein": 2.6,
        "serving_size": 100,
        "serving_unit": "g",
    },
)


def _create_base_tables(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE foods (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            calories REAL NOT NULL,
            fat REAL NOT NULL,
            carbs REAL NOT NULL,
            protein REAL NOT NULL,
            serving_size REAL NOT NULL,
            serving_unit TEXT NOT NULL,
            cholesterol REAL,
            sodium REAL,
            potassium REAL,
            is_custom INTEGER NOT NULL DEFAULT 0,
            is_pinned INTEGER NOT NULL DEFAULT 0
        )
        """
    )
    conn.execute("CREATE INDEX idx_foods_name ON foods (name)")
    conn.execute(
        """
        CREATE TABLE food_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            food_id INTEGER,
            recipe_id INTEGER,
            date TEXT NOT NULL,
            amount REAL NOT NULL,
            time_logged TEXT NOT NULL,
            time_of_day TEXT NOT NULL
        )
        """
    )
    conn.execute("CREATE INDEX idx_food_logs_date ON food_logs (date)")
    conn.execute(
        """
        CREATE TABLE daily_goals (
            key TEXT PRIMARY KEY,
            calories REAL NOT NULL,
            fat_percentage REAL NOT NULL,
            carbs_percentage REAL NOT NULL,
            protein_percentage REAL NOT NULL
        )
        """
    )
    conn.executemany(
        """
        INSERT INTO foods (
            name, calories, fat, carbs, protein, serving_size, serving_unit,
            is_custom, is_pinned
        )
        VALUES (
            :name, :calories, :fat, :carbs, :protein, :serving_size,
            :serving_unit, 0, 0
        )
        """,
        SEED_FOODS,
    )


def _create_recipes_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE recipes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            items TEXT NOT NULL,
            total_calories REAL NOT NULL,
            total_fat REAL NOT NULL,
            total_carbs REAL NOT NULL,
            total_protein REAL NOT NULL,
            is_pinned INTEGER NOT NULL DEFAULT 0
        )
        """
    )
    conn.execute("CREATE INDEX idx_recipes_name ON recipes (name)")


# Index i upgrades the schema from version i to i + 1. Steps only add.
MIGRATIONS: tuple[Callable[[sqlite3.Connection], None], ...] = (
    _create_base_tables,
    _create_recipes_table,
)
SCHEMA_VERSION = len(MIGRATIONS)


def migrate(conn: sqlite3.Connection, target_version: int = SCHEMA_VERSION) -> int:
    """Apply pending migrations up to ``target_version`` and return it."""
    current = conn.execute("PRAGMA user_version").fetchone()[0]
    if current >= target_version:
        return current
    with conn:
        conn.execute("BEGIN")
        for step in MIGRATIONS[current:target_version]:
            step(conn)
        conn.execute(f"PRAGMA user_version = {int(target_version)}")
    _logger.info("Database schema upgraded: from=%s to=%s", current, target_version)
    return target_version


@dataclass
class SqliteDatabase:
    """Single-connection SQLite handle opened on first use."""

    path: Path | str
    target_version: int = SCHEMA_VERSION
    _connection: sqlite3.Connection | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def connection(self) -> sqlite3.Connection:
        """Return the open connection, creating and migrating it once."""
        if self._connection is not None:
            return self._connection
        with self._lock:
            if self._connection is None:
                self._connection = self._open()
        return self._connection

    def close(self) -> None:
        """Close the connection if it was opened."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def _open(self) -> sqlite3.Connection:
        if str(self.path) != MEMORY_PATH:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            version = migrate(conn, self.target_version)
        except sqlite3.Error:
            conn.close()
            raise
        _logger.info("Database opened: path=%s version=%s", self.path, version)
        return conn
