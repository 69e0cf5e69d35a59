"""
Key-value persistence for the booking engine.

Values are stored as JSON text under a handful of fixed keys, mirroring what
the restaurant page keeps in the browser's local storage. Every write replaces
the whole value under its key. Reads never fail on bad data: a missing or
undecodable value is reported as absent.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from .extensions import db
from .models import StoredValue

logger = logging.getLogger(__name__)

TABLES_KEY = "restaurantTables"
BOOKINGS_KEY = "tableBookings"
USER_EMAIL_KEY = "userEmail"


class StorageAdapter(ABC):

    @abstractmethod
    def _read(self, key: str) -> str | None:
        ...

    @abstractmethod
    def _write(self, key: str, text: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    def get(self, key: str) -> Any:
        text = self._read(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError:
            logger.warning("Discarding undecodable value stored under %r", key)
            return None

    def set(self, key: str, value: Any) -> None:
        self._write(key, json.dumps(value))

    def setdefault(self, key: str, value: Any) -> bool:
        """Stores value only if key holds nothing yet. Returns True if written."""
        if self._read(key) is not None:
            return False
        self.set(key, value)
        return True

    def load(self, key: str) -> list[dict]:
        value = self.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning("Expected a list under %r, got %s", key, type(value).__name__)
            return []
        return [record for record in value if isinstance(record, dict)]

    def save(self, key: str, records: list[dict]) -> None:
        self.set(key, list(records))


class MemoryStorage(StorageAdapter):
    """Process-local storage, used for tests and one-off scripts."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def _read(self, key):
        return self._values.get(key)

    def _write(self, key, text):
        self._values[key] = text

    def delete(self, key):
        self._values.pop(key, None)


class SqlStorage(StorageAdapter):
    """Storage backed by the `storage` table; needs an application context."""

    def _row(self, key: str) -> StoredValue | None:
        return db.session.execute(
            select(StoredValue).where(StoredValue.key == key)
        ).scalar_one_or_none()

    def _read(self, key):
        row = self._row(key)
        return row.value if row is not None else None

    def _write(self, key, text):
        row = self._row(key)
        if row is None:
            db.session.add(StoredValue(key=key, value=text))
        else:
            row.value = text
        try:
            db.session.commit()
        except IntegrityError:
            # another writer created the key first; last write wins
            db.session.rollback()
            logger.warning("Concurrent first write to %r, overwriting", key)
            self._row(key).value = text
            db.session.commit()

    def delete(self, key):
        row = self._row(key)
        if row is not None:
            db.session.delete(row)
            db.session.commit()
