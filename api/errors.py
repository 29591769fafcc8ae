from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from services.exceptions import NotFoundError, ConflictError


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 404 Not Found (unknown route)
    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", 404)

    # Entity missing for an identifying key
    @app.errorhandler(NotFoundError)
    def handle_not_found(err: NotFoundError):
        details = {"entity": err.entity, "key": err.key, "value": err.value}
        return error_response("NOT_FOUND", str(err), 404, details=details)

    # Uniqueness or dependency violation
    @app.errorhandler(ConflictError)
    def handle_conflict(err: ConflictError):
        return error_response("CONFLICT", str(err), 409, details={"reason": err.reason, **err.payload})

    # Marshmallow validation errors map to 422
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        return error_response("VALIDATION_ERROR", "Invalid input", 422, details=err.messages)

    # Integrity errors the services did not translate (check constraints, FK violations)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        if current_app and current_app.debug:
            logging.exception("Integrity error", exc_info=err)
        # Heuristics: tailor the status
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409, details={"db_error": message})
        if "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400, details={"db_error": message})
        if "check constraint" in lower_msg or "constraint failed" in lower_msg:
            return error_response("BAD_REQUEST", "Check constraint failed.", 400, details={"db_error": message})
        # Generic integrity issue
        return error_response("BAD_REQUEST", "Integrity error.", 400, details={"db_error": message})

    # Other werkzeug HTTPExceptions keep their status; "Method Not Allowed" -> METHOD_NOT_ALLOWED
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        label = (err.name or "HTTP error").upper().replace(" ", "_")
        return error_response(label, err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        # In dev, include exception details to speed up debugging
        logging.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
