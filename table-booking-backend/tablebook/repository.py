import logging

from pydantic import ValidationError

from .schemas import DEFAULT_TABLES, Booking, Table
from .storage import BOOKINGS_KEY, TABLES_KEY, StorageAdapter

logger = logging.getLogger(__name__)


def _parse_records(model, records: list[dict], key: str) -> list:
    parsed = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning("Skipping malformed record under %r: %s", key, e.errors()[0]["msg"])
    return parsed


class TableCatalog:
    """The restaurant's fixed table layout."""

    def __init__(self, storage: StorageAdapter, tables: list[Table] | None = None):
        self.storage = storage
        self.default_tables = list(tables if tables is not None else DEFAULT_TABLES)

    def initialize(self) -> bool:
        written = self.storage.setdefault(
            TABLES_KEY, [t.model_dump(by_alias=True) for t in self.default_tables]
        )
        if written:
            logger.info("Seeded %d tables", len(self.default_tables))
        return written

    def get_all(self) -> list[Table]:
        return _parse_records(Table, self.storage.load(TABLES_KEY), TABLES_KEY)

    def get(self, table_id: int) -> Table | None:
        return next((t for t in self.get_all() if t.id == table_id), None)


class BookingRepository:
    """Sole writer of the booking collection."""

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    def get_all(self) -> list[Booking]:
        return _parse_records(Booking, self.storage.load(BOOKINGS_KEY), BOOKINGS_KEY)

    def _save_all(self, bookings: list[Booking]) -> None:
        self.storage.save(BOOKINGS_KEY, [b.to_record() for b in bookings])

    def add(self, booking: Booking) -> None:
        bookings = self.get_all()
        bookings.append(booking)
        self._save_all(bookings)

    def remove(self, booking_id: str) -> int:
        bookings = self.get_all()
        remaining = [b for b in bookings if b.id != booking_id]
        removed = len(bookings) - len(remaining)
        if removed:
            self._save_all(remaining)
        return removed

    def clear(self) -> None:
        self._save_all([])

    def exists(self, booking_id: str) -> bool:
        return any(b.id == booking_id for b in self.get_all())

    def find_by_date(self, day: str) -> list[Booking]:
        return [b for b in self.get_all() if b.date == day]

    def find_by_date_time(self, day: str, at: str) -> list[Booking]:
        return [b for b in self.get_all() if b.date == day and b.time == at]

    def find_by_email(self, email: str) -> list[Booking]:
        email = email.lower()
        mine = [b for b in self.get_all() if b.email.lower() == email]
        return sorted(mine, key=lambda b: (b.date, b.time))
