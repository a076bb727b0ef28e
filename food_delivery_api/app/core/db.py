"""
SQLite database integration and simple migration system.

The service keeps one SQLite file holding four entity tables and the
shared id counter.  Every entity table has the same shape, an integer
primary key and a JSON document, which makes each table an ordered
key-value map.  ``Database`` wraps a single connection opened at
application startup and offers a nestable ``transaction`` context so
that operations touching several tables commit or roll back as a
unit.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

from .config import settings

logger = logging.getLogger(__name__)

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: entity tables and the id counter cell
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS clients (
            id INTEGER PRIMARY KEY,
            data TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS items (
            id INTEGER PRIMARY KEY,
            data TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS orders (
            id INTEGER PRIMARY KEY,
            data TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS reviews (
            id INTEGER PRIMARY KEY,
            data TEXT NOT NULL
        );

        -- Single-row table; the CHECK keeps it a cell.
        CREATE TABLE IF NOT EXISTS id_counter (
            id INTEGER PRIMARY KEY CHECK (id = 0),
            value INTEGER NOT NULL
        );
        INSERT OR IGNORE INTO id_counter (id, value) VALUES (0, 0);
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned as is.  Relative
    paths are resolved against the package root.
    """
    db_url = database_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # food_delivery_api/
    return str((base_dir / db_url).resolve())


class Database:
    """A single SQLite connection plus transaction bookkeeping.

    Writes issued outside ``transaction()`` are committed immediately.
    Inside a transaction they are committed when the outermost block
    exits normally and rolled back if it raises.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        # The connection is created on the startup thread and then used
        # from the request thread, hence check_same_thread=False.
        self.conn = sqlite3.connect(path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._depth = 0

    @classmethod
    def open(cls, database_url: Optional[str] = None) -> "Database":
        db = cls(get_database_path(database_url))
        db.migrate()
        return db

    def close(self) -> None:
        self.conn.close()

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """Group writes so they are applied atomically."""
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self.conn.rollback()
                logger.debug("Transaction rolled back")
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                self.conn.commit()

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        return self.conn.execute(sql, tuple(params)).fetchall()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self.conn.execute(sql, tuple(params)).fetchone()

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        cursor = self.conn.execute(sql, tuple(params))
        if not self.in_transaction:
            self.conn.commit()
        return cursor

    def migrate(self) -> int:
        """Apply pending migrations and return the resulting schema version.

        If you add a new migration, append it to ``MIGRATIONS`` with an
        incremented version number.
        """
        cursor = self.conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits any pending transaction first
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
                logger.info("Applied migration %s to %s", version, self.path)
        self.conn.commit()
        return current_version
