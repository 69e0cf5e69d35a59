"""
Booking submission and cancellation.

`submit` is the only path that creates bookings. Each step raises a
`BookingError`, and `submit` hands it back inside a `BookingResult` so
callers never see an exception for bad input.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from .availability import AvailabilityEngine
from .errors import BookingError, BookingResult, ErrorCode
from .repository import BookingRepository, TableCatalog
from .schemas import Booking, BookingRequest, Table
from .storage import USER_EMAIL_KEY, StorageAdapter
from .utils.time import booking_id_at, parse_date, slot_datetime

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass
class SessionContext:
    """Who is asking. Set to the submitting email after each successful booking."""
    user_email: str | None = None


class SessionStore:
    """
    Keeps the current user under `userEmail`, as the booking page does.

    A helper for callers outside the web app, such as scripts driving a
    `TableBookingService` over one storage. The HTTP layer keeps the current
    user in the browser session instead.
    """

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    def load(self) -> SessionContext:
        email = self.storage.get(USER_EMAIL_KEY)
        return SessionContext(email if isinstance(email, str) and email else None)

    def save(self, context: SessionContext) -> None:
        if context.user_email:
            self.storage.set(USER_EMAIL_KEY, context.user_email)


class BookingWorkflow:

    def __init__(
        self,
        tables: TableCatalog,
        bookings: BookingRepository,
        availability: AvailabilityEngine,
        clock: Clock = datetime.now,
    ):
        self.tables = tables
        self.bookings = bookings
        self.availability = availability
        self.clock = clock

    def submit(self, request: BookingRequest | Mapping[str, Any], context: SessionContext) -> BookingResult:
        try:
            booking = self._submit(request)
        except BookingError as e:
            logger.warning("Booking refused (%s): %s", e.code.value, e.message)
            return BookingResult(error=e)

        context.user_email = booking.email
        logger.info("Booked %s for %s %s (%s)", booking.table_name, booking.date, booking.time, booking.id)
        return BookingResult(booking=booking)

    def _submit(self, request) -> Booking:
        if not isinstance(request, BookingRequest):
            try:
                request = BookingRequest.model_validate(request)
            except ValidationError as e:
                raise BookingError.from_validation(e)

        now = self.clock()
        self._check_not_past(request, now)
        table = self._resolve_table(request)

        booking = Booking(
            id=self._new_id(now),
            name=request.name,
            email=request.email,
            phone=request.phone or "",
            date=request.date,
            time=request.time,
            guests=request.guests,
            table_id=table.id,
            table_name=table.name,
            special_requests=request.special_requests,
            created_at=now.isoformat(),
        )
        self.bookings.add(booking)
        return booking

    def _check_not_past(self, request: BookingRequest, now: datetime) -> None:
        if parse_date(request.date) < now.date():
            raise BookingError(
                ErrorCode.PAST_DATE,
                "Cannot book tables for past dates. Please select a future date.",
            )
        if slot_datetime(request.date, request.time) < now:
            raise BookingError(
                ErrorCode.PAST_TIME,
                "Cannot book tables for past time slots. Please select a future date and time.",
            )

    def _resolve_table(self, request: BookingRequest) -> Table:
        if request.table_id is None:
            table = self.availability.select_table(request.date, request.time, request.guests)
            if table is None:
                raise BookingError(
                    ErrorCode.NO_TABLE_AVAILABLE,
                    "No tables available for the selected date and time. Please choose a different time slot.",
                )
            return table

        table = self.tables.get(request.table_id)
        if table is None:
            raise BookingError(
                ErrorCode.VALIDATION_ERROR,
                "Invalid input.",
                [{"field": "tableId", "message": f"Unknown table {request.table_id}."}],
            )
        if table.capacity < request.guests:
            raise BookingError(
                ErrorCode.TABLE_UNAVAILABLE,
                f"{table.name} seats {table.capacity}. Please choose another table.",
            )
        if not self.availability.is_table_available(table.id, request.date, request.time):
            raise BookingError(
                ErrorCode.TABLE_UNAVAILABLE,
                "Selected table is no longer available. Please choose another table.",
            )
        return table

    def _new_id(self, now: datetime) -> str:
        taken = {b.id for b in self.bookings.get_all()}
        candidate = booking_id_at(now)
        while candidate in taken:
            now += timedelta(milliseconds=1)
            candidate = booking_id_at(now)
        return candidate

    def cancel(self, booking_id: str) -> bool:
        removed = self.bookings.remove(booking_id)
        if removed:
            logger.info("Cancelled booking %s", booking_id)
        return bool(removed)
