from tablebook.repository import BookingRepository
from tablebook.schemas import Booking
from tablebook.storage import SqlStorage


def _stored_bookings(app):
    with app.app_context():
        return BookingRepository(SqlStorage()).get_all()


def test_init_tables_reports_layout(app):
    result = app.test_cli_runner().invoke(args=["init-tables"])
    assert result.exit_code == 0
    assert "12 tables ready." in result.output

    again = app.test_cli_runner().invoke(args=["init-tables"])
    assert "12 tables ready." in again.output


def test_seed_replaces_bookings(app):
    with app.app_context():
        BookingRepository(SqlStorage()).add(Booking(
            id="BK1",
            name="Old",
            email="old@example.com",
            date="2025-06-01",
            time="19:00",
            guests=2,
            table_id=1,
            table_name="Table 1",
            created_at="2025-05-31T18:00:00",
        ))

    result = app.test_cli_runner().invoke(args=["seed", "--count", "8"])
    assert result.exit_code == 0, result.output
    assert "Cleared existing bookings." in result.output

    bookings = _stored_bookings(app)
    assert f"Created {len(bookings)} bookings." in result.output
    assert 0 < len(bookings) <= 8
    assert "BK1" not in {b.id for b in bookings}

    slots = [(b.table_id, b.date, b.time) for b in bookings]
    assert len(slots) == len(set(slots))
    assert len({b.id for b in bookings}) == len(bookings)
