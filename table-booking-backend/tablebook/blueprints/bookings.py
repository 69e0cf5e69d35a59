from time import sleep

from flask import Blueprint, current_app, jsonify, request, session

from ..http import booking_error, jerror
from ..service import get_service
from ..utils.time import format_date, format_time
from ..workflow import SessionContext

bp = Blueprint("bookings", __name__)


def _booking_json(booking):
    data = booking.to_record()
    data["displayDate"] = format_date(booking.date)
    data["displayTime"] = format_time(booking.time)
    return data


@bp.post("")
def create_booking():
    payload = request.get_json(silent=True)
    if not payload:
        return jerror(400, "INVALID_PAYLOAD", "Missing or invalid JSON payload.")

    delay = current_app.config.get("SUBMIT_DELAY_SECONDS", 0)
    if delay > 0:
        sleep(delay)

    context = SessionContext(session.get("user_email"))
    result = get_service().submit_booking(payload, context)
    if not result.ok:
        return booking_error(result.error)

    session["user_email"] = context.user_email
    return jsonify(_booking_json(result.booking)), 201


@bp.get("/mine")
def my_bookings():
    """
    The current browser's bookings, soonest first.
    Query: ?email= overrides the email remembered from the last booking.
    """
    email = request.args.get("email") or session.get("user_email")
    bookings = get_service().list_my_bookings(email)
    return jsonify(email=email, bookings=[_booking_json(b) for b in bookings])


@bp.delete("/<booking_id>")
def cancel_booking(booking_id: str):
    get_service().cancel_booking(booking_id)
    return "", 204
