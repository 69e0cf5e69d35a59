from datetime import date, datetime, time

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def parse_date(s: str) -> date:
    """Parses a 'YYYY-MM-DD' calendar date."""
    return datetime.strptime(s.strip(), DATE_FORMAT).date()


def parse_time(s: str) -> time:
    """Parses an 'HH:MM' (or 'HH:MM:SS') time of day."""
    s = s.strip()
    for fmt in (TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(s, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"time data {s!r} does not match format 'HH:MM'")


def normalize_date(s: str) -> str:
    """Returns the stored form of a date, e.g. '2025-6-1' -> '2025-06-01'."""
    return parse_date(s).strftime(DATE_FORMAT)


def normalize_time(s: str) -> str:
    """Returns the stored form of a time, e.g. '9:00' -> '09:00'."""
    return parse_time(s).strftime(TIME_FORMAT)


def slot_datetime(day: str, at: str) -> datetime:
    """Combines a stored date and time into a naive local datetime."""
    return datetime.combine(parse_date(day), parse_time(at))


def booking_id_at(created_at: datetime) -> str:
    """Formats a booking id from its creation instant in epoch milliseconds."""
    return f"BK{int(created_at.timestamp() * 1000)}"


def format_date(day: str) -> str:
    """Formats a stored date for display, e.g. 'Sunday, 1 June 2025'."""
    d = parse_date(day)
    return f"{d:%A}, {d.day} {d:%B %Y}"


def format_time(at: str) -> str:
    """Formats a stored 24h time as '7:00 PM'."""
    t = parse_time(at)
    suffix = "PM" if t.hour >= 12 else "AM"
    return f"{t.hour % 12 or 12}:{t.minute:02d} {suffix}"
