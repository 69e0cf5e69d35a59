from flask import Blueprint, jsonify, request, session

from ..http import jerror
from ..service import get_service
from ..utils.time import DATE_FORMAT, TIME_FORMAT, format_time, parse_date, parse_time

bp = Blueprint("tables", __name__)


def _day_arg():
    """Returns (day, error_response) for the required ?date= argument."""
    d = request.args.get("date")
    if not d:
        return None, jerror(400, "MISSING_DATE", "Missing 'date' query parameter (YYYY-MM-DD).")
    try:
        return parse_date(d).strftime(DATE_FORMAT), None
    except ValueError as e:
        return None, jerror(422, "BAD_DATE", "Invalid date format. Use YYYY-MM-DD.", str(e))


def _time_arg(required: bool):
    t = request.args.get("time")
    if not t:
        if required:
            return None, jerror(400, "MISSING_TIME", "Missing 'time' query parameter (HH:MM).")
        return None, None
    try:
        return parse_time(t).strftime(TIME_FORMAT), None
    except ValueError as e:
        return None, jerror(422, "BAD_TIME", "Invalid time format. Use HH:MM.", str(e))


def _table_json(table):
    return {"id": table.id, "name": table.name, "capacity": table.capacity}


@bp.get("")
def list_tables():
    return jsonify(tables=[_table_json(t) for t in get_service().list_tables()])


@bp.get("/availability")
def availability():
    day, err = _day_arg()
    if err:
        return err
    at, err = _time_arg(required=False)
    if err:
        return err

    user_email = request.args.get("email") or session.get("user_email")
    board = get_service().availability_board(day, at, user_email)

    data = []
    for s in board:
        row = _table_json(s.table)
        row["status"] = s.status.value
        row["bookingCount"] = s.bookings_on_date
        if s.booking is not None:
            row["bookingTime"] = format_time(s.booking.time)
            row["guests"] = s.booking.guests
        data.append(row)

    return jsonify(date=day, time=at, tables=data)


@bp.get("/candidates")
def candidates():
    day, err = _day_arg()
    if err:
        return err
    at, err = _time_arg(required=True)
    if err:
        return err
    try:
        guests = int(request.args.get("guests", 1))
    except ValueError as e:
        return jerror(422, "BAD_GUESTS", "Guests must be a whole number.", str(e))

    tables = get_service().candidate_tables(day, at, guests)
    return jsonify(date=day, time=at, guests=guests, tables=[_table_json(t) for t in tables])
