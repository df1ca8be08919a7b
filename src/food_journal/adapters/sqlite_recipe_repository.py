"""SQLite repository for recipes."""

import json
import sqlite3
from dataclasses import dataclass

from food_journal.adapters.sqlite_database import SqliteDatabase
from food_journal.domain.foods import NewRecipe, Recipe, RecipeItem
from food_journal.services.store import RecipeRepository


@dataclass
class SqliteRecipeRepository(RecipeRepository):
    """SQLite-backed repository for recipes.

    Recipe items are stored as a JSON array on the recipe row.
    """

    database: SqliteDatabase

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes in id order."""
        rows = (
            self.database.connection()
            .execute("SELECT * FROM recipes ORDER BY id")
            .fetchall()
        )
        return [_parse_recipe(row) for row in rows]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""
        row = (
            self.database.connection()
            .execute("SELECT * FROM recipes WHERE id = ?", (recipe_id,))
            .fetchone()
        )
        if row is None:
            return None
        return _parse_recipe(row)

    def create_recipe(self, recipe: NewRecipe) -> int:
        """Insert a recipe and return its new id."""
        conn = self.database.connection()
        with conn:
            cursor = conn.execute(
                """
                INSERT INTO recipes (
                    name, items, total_calories, total_fat, total_carbs,
                    total_protein, is_pinned
                )
                VALUES (
                    :name, :items, :total_calories, :total_fat, :total_carbs,
                    :total_protein, :is_pinned
                )
                """,
                _to_row(recipe),
            )
        return int(cursor.lastrowid)

    def replace_recipe(self, recipe: Recipe) -> bool:
        """Overwrite a recipe row, returning False when the id is absent."""
        conn = self.database.connection()
        with conn:
            cursor = conn.execute(
                """
                UPDATE recipes SET
                    name = :name,
                    items = :items,
                    total_calories = :total_calories,
                    total_fat = :total_fat,
                    total_carbs = :total_carbs,
                    total_protein = :total_protein,
                    is_pinned = :is_pinned
                WHERE id = :id
                """,
                {"id": recipe.id, **_to_row(recipe)},
            )
        return cursor.rowcount > 0

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe if present."""
        conn = self.database.connection()
        with conn:
            conn.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))


def _to_row(recipe: NewRecipe | Recipe) -> dict[str, object]:
    return {
        "name": recipe.name,
        "items": json.dumps(
            [{"food_id": item.food_id, "amount": item.amount} for item in recipe.items]
        ),
        "total_calories": recipe.total_calories,
        "total_fat": recipe.total_fat,
        "total_carbs": recipe.total_carbs,
        "total_protein": recipe.total_protein,
        "is_pinned": recipe.is_pinned,
    }


def _parse_recipe(row: sqlite3.Row) -> Recipe:
    """Parse a recipes row into a domain model."""
    items_raw = json.loads(row["items"] or "[]")
    return Recipe(
        id=int(row["id"]),
        name=str(row["name"]),
        items=tuple(
            RecipeItem(food_id=int(item["food_id"]), amount=float(item["amount"]))
            for item in items_raw
        ),
        total_calories=float(row["total_calories"]),
        total_fat=float(row["total_fat"]),
        total_carbs=float(row["total_carbs"]),
        total_protein=float(row["total_protein"]),
        is_pinned=bool(row["is_pinned"]),
    )
