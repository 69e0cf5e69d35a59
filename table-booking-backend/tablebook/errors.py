from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from .schemas import Booking


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PAST_DATE = "PAST_DATE"
    PAST_TIME = "PAST_TIME"
    TABLE_UNAVAILABLE = "TABLE_UNAVAILABLE"
    NO_TABLE_AVAILABLE = "NO_TABLE_AVAILABLE"


class BookingError(Exception):
    """A user-facing reason a booking request was refused."""

    def __init__(self, code: ErrorCode, message: str, details: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    @classmethod
    def from_validation(cls, exc: ValidationError) -> "BookingError":
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return cls(ErrorCode.VALIDATION_ERROR, "Invalid input.", details)

    def to_dict(self) -> dict[str, Any]:
        payload = {"code": self.code.value, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


@dataclass
class BookingResult:
    booking: Booking | None = None
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
