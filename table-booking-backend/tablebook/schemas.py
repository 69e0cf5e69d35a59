import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .utils.time import normalize_date, normalize_time

PHONE_PATTERN = re.compile(r"^[\+]?[(]?[0-9]{3}[)]?[-\s\.]?[0-9]{3}[-\s\.]?[0-9]{4,6}$")

_RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Table(BaseModel):
    model_config = _RECORD_CONFIG

    id: int
    capacity: int = Field(..., gt=0)
    name: str


DEFAULT_TABLES = [
    Table(id=i, capacity=capacity, name=f"Table {i}")
    for i, capacity in enumerate([2, 2, 4, 4, 4, 4, 6, 6, 6, 8, 8, 8], start=1)
]


class Booking(BaseModel):
    model_config = _RECORD_CONFIG

    id: str
    name: str
    email: str
    phone: str = ""
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    guests: int = Field(..., gt=0)
    table_id: int
    table_name: str
    special_requests: str | None = None
    created_at: str

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)


class BookingRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(None, max_length=32)
    date: str
    time: str
    guests: int = Field(..., gt=0)
    table_id: int | None = None
    special_requests: str | None = Field(None, max_length=500)

    @field_validator("phone", "table_id", "special_requests", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("guests", mode="before")
    @classmethod
    def guests_not_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("Guests must be a whole number.")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str | None):
        if v is not None and not PHONE_PATTERN.match(re.sub(r"\s", "", v)):
            raise ValueError("Phone number is not in a recognised format.")
        return v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        try:
            return normalize_date(v)
        except ValueError:
            raise ValueError("Date must be a calendar date in YYYY-MM-DD format.")

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        try:
            return normalize_time(v)
        except ValueError:
            raise ValueError("Time must be in HH:MM format.")
