from datetime import datetime

import pytest

from tablebook.app import create_app
from tablebook.extensions import db
from tablebook.schemas import Table
from tablebook.service import TableBookingService
from tablebook.storage import MemoryStorage

FIXED_NOW = datetime(2025, 5, 31, 18, 0)

SMALL_LAYOUT = [
    Table(id=1, capacity=2, name="Table 1"),
    Table(id=2, capacity=4, name="Table 2"),
    Table(id=3, capacity=4, name="Table 3"),
]


def _fixed_clock():
    return FIXED_NOW


def booking_payload(**overrides):
    payload = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "555-123-4567",
        "date": "2025-06-01",
        "time": "19:00",
        "guests": 2,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def service(storage):
    return TableBookingService(storage, clock=_fixed_clock)


@pytest.fixture
def small_service(storage):
    return TableBookingService(storage, tables=SMALL_LAYOUT, clock=_fixed_clock)


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "BOOKING_CLOCK": _fixed_clock,
        "SUBMIT_DELAY_SECONDS": 0,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
