from flask import jsonify

from .errors import BookingError, ErrorCode

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.PAST_DATE: 422,
    ErrorCode.PAST_TIME: 422,
    ErrorCode.TABLE_UNAVAILABLE: 409,
    ErrorCode.NO_TABLE_AVAILABLE: 409,
}

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status

def booking_error(err: BookingError):
    return jerror(ERROR_STATUS[err.code], err.code.value, err.message, err.details)
