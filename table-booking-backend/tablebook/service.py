from datetime import datetime

from flask import current_app, g

from .availability import AvailabilityEngine, AvailabilityStatus, TableStatus
from .errors import BookingResult
from .repository import BookingRepository, TableCatalog
from .schemas import Booking, Table
from .storage import SqlStorage, StorageAdapter
from .workflow import BookingWorkflow, Clock, SessionContext


class TableBookingService:
    """
    Everything the booking page calls, wired over a single storage adapter.
    """

    def __init__(self, storage: StorageAdapter, tables: list[Table] | None = None, clock: Clock = datetime.now):
        self.storage = storage
        self.tables = TableCatalog(storage, tables)
        self.bookings = BookingRepository(storage)
        self.availability = AvailabilityEngine(self.tables, self.bookings)
        self.workflow = BookingWorkflow(self.tables, self.bookings, self.availability, clock)
        self.tables.initialize()

    def list_tables(self) -> list[Table]:
        return self.tables.get_all()

    def get_availability(self, day: str, at: str | None = None, user_email: str | None = None) -> dict[int, AvailabilityStatus]:
        return self.availability.statuses(day, at, user_email)

    def availability_board(self, day: str, at: str | None = None, user_email: str | None = None) -> list[TableStatus]:
        return self.availability.board(day, at, user_email)

    def candidate_tables(self, day: str, at: str, guests: int) -> list[Table]:
        return self.availability.candidate_tables(day, at, guests)

    def submit_booking(self, request, context: SessionContext) -> BookingResult:
        return self.workflow.submit(request, context)

    def cancel_booking(self, booking_id: str) -> None:
        self.workflow.cancel(booking_id)

    def list_my_bookings(self, user_email: str | None) -> list[Booking]:
        if not user_email:
            return []
        return self.bookings.find_by_email(user_email)


def get_service() -> TableBookingService:
    """The request's service, backed by the application's database."""
    if "booking_service" not in g:
        clock = current_app.config.get("BOOKING_CLOCK") or datetime.now
        g.booking_service = TableBookingService(SqlStorage(), clock=clock)
    return g.booking_service
