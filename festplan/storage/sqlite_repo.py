"""
SQLite Repository

Handles all database operations using SQLite. No business logic here:
every function opens a connection, runs its statements and closes it.
"""

import logging
import math
import os
import sqlite3
from pathlib import Path
from typing import Dict, List, Optional

from festplan.errors import ConfigError, ConflictError, NotFoundError, ValidationError
from festplan.models.cocktails import Cocktail
from festplan.models.fests import Fest, FestCocktail
from festplan.models.inventory import InventoryLine

logger = logging.getLogger(__name__)

# Default database path
DEFAULT_DB_PATH = "./fest.sqlite"

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS cocktails (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cocktail_ingredients (
        cocktail_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        amount REAL NOT NULL,
        UNIQUE (cocktail_id, name),
        FOREIGN KEY (cocktail_id) REFERENCES cocktails(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS inventory (
        name TEXT NOT NULL UNIQUE,
        available REAL DEFAULT 0.0,
        price INTEGER DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS fests (
        date TEXT PRIMARY KEY
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS fest_cocktails (
        fest_date TEXT NOT NULL,
        cocktail TEXT NOT NULL,
        price INTEGER DEFAULT 0,
        amount INTEGER DEFAULT 0,
        UNIQUE (fest_date, cocktail),
        FOREIGN KEY (fest_date) REFERENCES fests(date)
    )
    """,
]


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Get a database connection."""
    db_path = db_path or os.environ.get("FESTPLAN_DATABASE", DEFAULT_DB_PATH)

    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_database(db_path: Optional[str] = None):
    """Create any missing tables."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        for stmt in SCHEMA_STATEMENTS:
            cursor.execute(stmt)
        conn.commit()
        logger.debug("Database schema ensured")

    finally:
        conn.close()


def open_or_create_database(db_path: str, schema_path: Optional[str] = None) -> bool:
    """
    Open the database, creating it when the file does not exist yet.

    A new database is first fed the optional schema file, then the
    built-in schema fills in whatever tables are still missing. If any
    step fails the new file is removed again.

    Returns:
        True if a new database was created
    """
    created = not Path(db_path).exists()

    if not created:
        init_database(db_path)
        return False

    logger.info(f"Database not found at {db_path}, creating new")
    if schema_path and not Path(schema_path).is_file():
        raise ConfigError(
            f"schema file not found: {schema_path}",
            details={"schema": schema_path},
        )

    try:
        if schema_path:
            conn = get_connection(db_path)
            try:
                conn.executescript(Path(schema_path).read_text(encoding="utf-8"))
            finally:
                conn.close()
        init_database(db_path)
    except Exception:
        # A half-built file would be taken for a complete database next start
        logger.error(f"Creating {db_path} failed, removing it")
        Path(db_path).unlink(missing_ok=True)
        raise

    return True


def _cocktail_id(cursor: sqlite3.Cursor, name: str) -> int:
    cursor.execute("SELECT id FROM cocktails WHERE name = ?", (name,))
    row = cursor.fetchone()
    if not row:
        raise NotFoundError("Cocktail", name)
    return row["id"]


# Cocktail operations

def insert_cocktail(cocktail: Cocktail, db_path: Optional[str] = None):
    """
    Save a cocktail and its recipe lines in one transaction.

    Ingredients without an inventory line get one with zero stock and price.
    """
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()

        try:
            cursor.execute("INSERT INTO cocktails (name) VALUES (?)", (cocktail.name,))
        except sqlite3.IntegrityError:
            raise ConflictError(
                f"cocktail already exists: {cocktail.name}",
                details={"cocktail": cocktail.name},
            )
        cocktail_id = cursor.lastrowid

        for ingredient, amount in cocktail.ingredients.items():
            cursor.execute("INSERT OR IGNORE INTO inventory (name) VALUES (?)", (ingredient,))
            cursor.execute("""
                INSERT INTO cocktail_ingredients (cocktail_id, name, amount)
                VALUES (?, ?, ?)
            """, (cocktail_id, ingredient, amount))

        conn.commit()
        logger.info(f"Saved cocktail {cocktail.name} with {len(cocktail.ingredients)} ingredients")

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()


def list_cocktails(db_path: Optional[str] = None) -> List[Cocktail]:
    """All cocktails with their ingredients, ordered by name."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT c.name AS cocktail, ci.name AS ingredient, ci.amount AS amount
            FROM cocktails c
            LEFT JOIN cocktail_ingredients ci ON ci.cocktail_id = c.id
            ORDER BY c.name, ci.name
        """)

        recipes: Dict[str, Dict[str, float]] = {}
        for row in cursor.fetchall():
            ingredients = recipes.setdefault(row["cocktail"], {})
            if row["ingredient"] is not None:
                ingredients[row["ingredient"]] = row["amount"]

        return [Cocktail(name=name, ingredients=ingredients) for name, ingredients in recipes.items()]

    finally:
        conn.close()


def get_cocktail(name: str, db_path: Optional[str] = None) -> Cocktail:
    """Load one cocktail by name."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cocktail_id = _cocktail_id(cursor, name)

        cursor.execute(
            "SELECT name, amount FROM cocktail_ingredients WHERE cocktail_id = ? ORDER BY name",
            (cocktail_id,)
        )
        ingredients = {row["name"]: row["amount"] for row in cursor.fetchall()}

        return Cocktail(name=name, ingredients=ingredients)

    finally:
        conn.close()


def rename_cocktail(old_name: str, new_name: str, db_path: Optional[str] = None):
    """Rename a cocktail. Fest selections follow the new name."""
    new_name = new_name.strip()
    if not new_name:
        raise ValidationError("cocktail name must not be empty")

    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cocktail_id = _cocktail_id(cursor, old_name)

        try:
            cursor.execute("UPDATE cocktails SET name = ? WHERE id = ?", (new_name, cocktail_id))
        except sqlite3.IntegrityError:
            raise ConflictError(
                f"cocktail already exists: {new_name}",
                details={"cocktail": new_name},
            )
        cursor.execute(
            "UPDATE fest_cocktails SET cocktail = ? WHERE cocktail = ?",
            (new_name, old_name)
        )

        conn.commit()
        logger.info(f"Renamed cocktail {old_name} to {new_name}")

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()


def update_cocktail_ingredient(
    cocktail: str,
    ingredient: str,
    amount: float,
    db_path: Optional[str] = None
):
    """Change how much of one ingredient a serving needs."""
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(f"amount must be positive, got {amount}")

    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cocktail_id = _cocktail_id(cursor, cocktail)

        cursor.execute("""
            UPDATE cocktail_ingredients SET amount = ?
            WHERE cocktail_id = ? AND name = ?
        """, (amount, cocktail_id, ingredient))
        if cursor.rowcount == 0:
            raise NotFoundError("Ingredient", f"{ingredient} in {cocktail}")

        conn.commit()
        logger.info(f"Set {ingredient} in {cocktail} to {amount} l")

    finally:
        conn.close()


# Inventory operations

def add_inventory_item(
    name: str,
    price: int = 0,
    available: float = 0.0,
    db_path: Optional[str] = None
):
    """Add a new ingredient to the inventory."""
    name = name.strip()
    if not name:
        raise ValidationError("ingredient name must not be empty")
    if not math.isfinite(available) or price < 0 or available < 0:
        raise ValidationError("price and availability must be non-negative numbers")

    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO inventory (name, available, price) VALUES (?, ?, ?)",
                (name, available, price)
            )
        except sqlite3.IntegrityError:
            raise ConflictError(
                f"ingredient already exists: {name}",
                details={"ingredient": name},
            )

        conn.commit()
        logger.info(f"Added inventory item {name}")

    finally:
        conn.close()


def list_inventory(db_path: Optional[str] = None) -> List[InventoryLine]:
    """All inventory lines, ordered by name."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cursor.execute("SELECT name, available, price FROM inventory ORDER BY name")

        return [
            InventoryLine(
                name=row["name"],
                available=row["available"] or 0.0,
                price=row["price"] or 0,
            )
            for row in cursor.fetchall()
        ]

    finally:
        conn.close()


def get_stock(db_path: Optional[str] = None) -> Dict[str, float]:
    """Ingredient -> liters available."""
    return {line.name: line.available for line in list_inventory(db_path)}


def get_prices(db_path: Optional[str] = None) -> Dict[str, int]:
    """Ingredient -> cents per liter."""
    return {line.name: line.price for line in list_inventory(db_path)}


def _update_inventory(column: str, name: str, value, db_path: Optional[str]):
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cursor.execute(f"UPDATE inventory SET {column} = ? WHERE name = ?", (value, name))
        if cursor.rowcount == 0:
            raise NotFoundError("Ingredient", name)

        conn.commit()
        logger.info(f"Set {column} of {name} to {value}")

    finally:
        conn.close()


def set_availability(name: str, available: float, db_path: Optional[str] = None):
    """Record how many liters of an ingredient are on hand."""
    if not math.isfinite(available) or available < 0:
        raise ValidationError(f"availability must be a non-negative number, got {available}")
    _update_inventory("available", name, available, db_path)


def set_price(name: str, price: int, db_path: Optional[str] = None):
    """Record the price of an ingredient in cents per liter."""
    if price < 0:
        raise ValidationError(f"price must not be negative, got {price}")
    _update_inventory("price", name, price, db_path)


# Fest operations

def create_fest(date: str, db_path: Optional[str] = None):
    """Register a fest date. Does nothing if it already exists."""
    conn = get_connection(db_path)

    try:
        conn.execute("INSERT OR IGNORE INTO fests (date) VALUES (?)", (date,))
        conn.commit()

    finally:
        conn.close()


def list_fest_dates(db_path: Optional[str] = None) -> List[str]:
    """All fest dates, oldest first."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()
        cursor.execute("SELECT date FROM fests ORDER BY date")
        return [row["date"] for row in cursor.fetchall()]

    finally:
        conn.close()


def get_fest(date: str, db_path: Optional[str] = None) -> Fest:
    """Load a fest and its cocktail selection."""
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()

        cursor.execute("SELECT date FROM fests WHERE date = ?", (date,))
        if not cursor.fetchone():
            raise NotFoundError("Fest", date)

        cursor.execute("""
            SELECT cocktail, amount, price FROM fest_cocktails
            WHERE fest_date = ?
            ORDER BY cocktail
        """, (date,))

        cocktails = {}
        for row in cursor.fetchall():
            cocktails[row["cocktail"]] = FestCocktail(
                cocktail=row["cocktail"],
                amount=row["amount"] or 0,
                price=row["price"] or 0,
            )

        return Fest(date=date, cocktails=cocktails)

    finally:
        conn.close()


def set_fest_cocktail(
    fest_date: str,
    cocktail: str,
    price: int = 0,
    amount: int = 0,
    delete: bool = False,
    db_path: Optional[str] = None
) -> bool:
    """
    Select, update or deselect a cocktail for a fest.

    With delete=False an existing selection gets the new price and amount,
    otherwise a new one is inserted. With delete=True the selection is
    removed if it exists.

    Returns:
        True if a row was written or removed
    """
    conn = get_connection(db_path)

    try:
        cursor = conn.cursor()

        if delete:
            cursor.execute(
                "DELETE FROM fest_cocktails WHERE fest_date = ? AND cocktail = ?",
                (fest_date, cocktail)
            )
            conn.commit()
            removed = cursor.rowcount > 0
            if removed:
                logger.info(f"Deselected {cocktail} for fest {fest_date}")
            return removed

        if price < 0 or amount < 0:
            raise ValidationError("price and amount must not be negative")
        _cocktail_id(cursor, cocktail)

        cursor.execute("INSERT OR IGNORE INTO fests (date) VALUES (?)", (fest_date,))
        cursor.execute("""
            INSERT INTO fest_cocktails (fest_date, cocktail, price, amount)
            VALUES (?, ?, ?, ?)
            ON CONFLICT (fest_date, cocktail)
            DO UPDATE SET price = excluded.price, amount = excluded.amount
        """, (fest_date, cocktail, price, amount))

        conn.commit()
        logger.info(f"Selected {amount} x {cocktail} at {price} ct for fest {fest_date}")
        return True

    finally:
        conn.close()
