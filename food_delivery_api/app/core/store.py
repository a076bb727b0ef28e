"""
Persistent entity stores and the shared id allocator.

Each ``EntityStore`` is an ordered map from an integer id to a record
serialized as JSON by its pydantic model.  There are no secondary
indexes: every attribute query is a full ``scan`` followed by a
predicate filter, which is adequate for the small data volumes this
service is meant for.

``AppState`` bundles the database, the allocator and the four stores.
It is created once at startup and handed to every request through the
``get_state`` dependency instead of living in module globals.
"""

import logging
from typing import Callable, Generic, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel

from .config import settings
from .db import Database
from .errors import IdCounterCorrupted, InvalidPayload
from ..schemas.client import ClientRead
from ..schemas.item import ItemRead
from ..schemas.order import OrderRead
from ..schemas.review import ReviewRead

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# SQLite integer keys are signed 64-bit.
MAX_KEY = 2**63 - 1


class IdAllocator:
    """Monotonic counter shared by all entity kinds.

    Ids start at 0 and are never reused, even after the record that
    received one is deleted.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    def current(self) -> int:
        """Return the next id that will be handed out, without consuming it."""
        row = self.db.query_one("SELECT value FROM id_counter WHERE id = 0")
        if row is None:
            logger.critical("Id counter cell is missing in %s", self.db.path)
            raise IdCounterCorrupted("id counter cell is missing")
        value = row["value"]
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.critical("Id counter cell holds an invalid value: %r", value)
            raise IdCounterCorrupted(f"id counter cell holds an invalid value: {value!r}")
        return value

    def next_id(self) -> int:
        current_id = self.current()
        self.db.execute("UPDATE id_counter SET value = ? WHERE id = 0", (current_id + 1,))
        return current_id


class EntityStore(Generic[RecordT]):
    """Ordered id -> record map backed by one SQLite table."""

    def __init__(
        self,
        db: Database,
        table: str,
        model: Type[RecordT],
        max_record_size: Optional[int] = None,
    ) -> None:
        self.db = db
        self.table = table
        self.model = model
        self.max_record_size = max_record_size or settings.max_record_size

    def _decode(self, data: str) -> RecordT:
        return self.model.model_validate_json(data)

    def insert(self, record_id: int, record: RecordT) -> Optional[RecordT]:
        """Store ``record`` under ``record_id``, replacing any previous one.

        Returns the replaced record, if there was one.
        """
        if not 0 <= record_id <= MAX_KEY:
            raise InvalidPayload(f"{self.table} record id: {record_id} is out of range")
        data = record.model_dump_json()
        if len(data.encode("utf-8")) > self.max_record_size:
            raise InvalidPayload(
                f"{self.table} record id: {record_id} exceeds {self.max_record_size} bytes"
            )
        previous = self.get(record_id)
        self.db.execute(
            f"INSERT OR REPLACE INTO {self.table} (id, data) VALUES (?, ?)",
            (record_id, data),
        )
        return previous

    def get(self, record_id: int) -> Optional[RecordT]:
        if not 0 <= record_id <= MAX_KEY:
            return None
        row = self.db.query_one(f"SELECT data FROM {self.table} WHERE id = ?", (record_id,))
        if row is None:
            return None
        return self._decode(row["data"])

    def scan(self) -> list[tuple[int, RecordT]]:
        """Return every ``(id, record)`` pair in ascending id order."""
        rows = self.db.query(f"SELECT id, data FROM {self.table} ORDER BY id")
        return [(row["id"], self._decode(row["data"])) for row in rows]

    def values(self) -> list[RecordT]:
        return [record for _, record in self.scan()]

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [record for record in self.values() if predicate(record)]

    def remove(self, record_id: int) -> Optional[RecordT]:
        previous = self.get(record_id)
        if previous is None:
            return None
        self.db.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
        return previous

    def count(self) -> int:
        row = self.db.query_one(f"SELECT COUNT(*) AS count FROM {self.table}")
        return row["count"]


class AppState:
    """Database, id allocator and the four entity stores."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.ids = IdAllocator(db)
        self.clients: EntityStore[ClientRead] = EntityStore(db, "clients", ClientRead)
        self.items: EntityStore[ItemRead] = EntityStore(db, "items", ItemRead)
        self.orders: EntityStore[OrderRead] = EntityStore(db, "orders", OrderRead)
        self.reviews: EntityStore[ReviewRead] = EntityStore(db, "reviews", ReviewRead)

    @classmethod
    def open(cls, database_url: Optional[str] = None) -> "AppState":
        """Open the database, apply migrations and verify the id counter.

        A corrupt counter raises ``IdCounterCorrupted`` here so the
        application refuses to start rather than handing out bad ids.
        """
        db = Database.open(database_url)
        state = cls(db)
        try:
            next_id = state.ids.current()
        except IdCounterCorrupted:
            db.close()
            raise
        logger.info("Opened %s, next id is %s", db.path, next_id)
        return state

    def transaction(self):
        return self.db.transaction()

    def close(self) -> None:
        self.db.close()


def get_state(request: Request) -> AppState:
    """FastAPI dependency returning the state opened at startup."""
    return request.app.state.store
