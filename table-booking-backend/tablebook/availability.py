from dataclasses import dataclass
from enum import Enum

from .repository import BookingRepository, TableCatalog
from .schemas import Booking, Table
from .utils.time import normalize_date, normalize_time


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED_BY_OTHER = "BOOKED_BY_OTHER"
    BOOKED_BY_SELF = "BOOKED_BY_SELF"
    BOOKED_BY_SELF_DIFFERENT_TIME = "BOOKED_BY_SELF_DIFFERENT_TIME"
    HAS_BOOKINGS = "HAS_BOOKINGS"
    UNKNOWN_NO_TIME_SELECTED = "UNKNOWN_NO_TIME_SELECTED"


@dataclass
class TableStatus:
    table: Table
    status: AvailabilityStatus
    # the booking behind the status, if any
    booking: Booking | None = None
    bookings_on_date: int = 0


class AvailabilityEngine:
    """Read-only view over tables and bookings."""

    def __init__(self, tables: TableCatalog, bookings: BookingRepository):
        self.tables = tables
        self.bookings = bookings

    def is_table_available(self, table_id: int, day: str, at: str) -> bool:
        day, at = normalize_date(day), normalize_time(at)
        return not any(b.table_id == table_id for b in self.bookings.find_by_date_time(day, at))

    def board(self, day: str, at: str | None = None, user_email: str | None = None) -> list[TableStatus]:
        """
        Classifies every table for a date and, optionally, a time.

        Without a time only a per-date summary is possible: the user's own
        booking on that table, some booking by anyone, or nothing known.
        Capacity never affects the status.
        """
        day = normalize_date(day)
        at = normalize_time(at) if at else None
        user_email = (user_email or "").lower()
        on_date = self.bookings.find_by_date(day)
        mine = [b for b in on_date if user_email and b.email.lower() == user_email]

        board = []
        for table in self.tables.get_all():
            table_bookings = [b for b in on_date if b.table_id == table.id]
            own = next((b for b in mine if b.table_id == table.id), None)

            if not at:
                if own:
                    status = TableStatus(table, AvailabilityStatus.BOOKED_BY_SELF_DIFFERENT_TIME, own)
                elif table_bookings:
                    status = TableStatus(table, AvailabilityStatus.HAS_BOOKINGS)
                else:
                    status = TableStatus(table, AvailabilityStatus.UNKNOWN_NO_TIME_SELECTED)
                status.bookings_on_date = len(table_bookings)
                board.append(status)
                continue

            in_slot = [b for b in table_bookings if b.time == at]
            own_in_slot = next((b for b in in_slot if b in mine), None)
            if own_in_slot:
                status = TableStatus(table, AvailabilityStatus.BOOKED_BY_SELF, own_in_slot)
            elif own:
                status = TableStatus(table, AvailabilityStatus.BOOKED_BY_SELF_DIFFERENT_TIME, own)
            elif in_slot:
                status = TableStatus(table, AvailabilityStatus.BOOKED_BY_OTHER, in_slot[0])
            else:
                status = TableStatus(table, AvailabilityStatus.AVAILABLE)
            status.bookings_on_date = len(table_bookings)
            board.append(status)
        return board

    def statuses(self, day: str, at: str | None = None, user_email: str | None = None) -> dict[int, AvailabilityStatus]:
        return {s.table.id: s.status for s in self.board(day, at, user_email)}

    def candidate_tables(self, day: str, at: str, guests: int) -> list[Table]:
        """Tables that seat the party and are free in the slot, in layout order."""
        day, at = normalize_date(day), normalize_time(at)
        taken = {b.table_id for b in self.bookings.find_by_date_time(day, at)}
        fits = (t for t in self.tables.get_all() if t.capacity >= guests)
        return [t for t in fits if t.id not in taken]

    def select_table(self, day: str, at: str, guests: int) -> Table | None:
        # sorted() is stable, so equal capacities keep layout order
        ranked = sorted(self.candidate_tables(day, at, guests), key=lambda t: t.capacity)
        return ranked[0] if ranked else None
