from __future__ import annotations

from flask import jsonify, request, session

from ..core.exceptions import (
    AlreadyAdmittedError,
    AuthenticationError,
    CapacityExceededError,
    DependencyFailureError,
    DomainError,
    DuplicateEmailError,
    InvalidCapacityError,
    NotFoundError,
    ValidationError,
)

# Most specific classes first: InvalidCapacityError is also a ValidationError.
_ERROR_TABLE: tuple[tuple[type[DomainError], int, str], ...] = (
    (NotFoundError, 404, "not_found"),
    (DuplicateEmailError, 409, "duplicate_email"),
    (AlreadyAdmittedError, 409, "already_admitted"),
    (CapacityExceededError, 409, "capacity_exceeded"),
    (InvalidCapacityError, 400, "invalid_capacity"),
    (ValidationError, 400, "invalid_input"),
    (AuthenticationError, 401, "authentication_failed"),
    (DependencyFailureError, 503, "dependency_failure"),
)


def error_status(exc: DomainError) -> tuple[int, str]:
    for exc_type, status, code in _ERROR_TABLE:
        if isinstance(exc, exc_type):
            return status, code
    return 400, "domain_error"


def domain_error_response(exc: DomainError):
    status, code = error_status(exc)
    # Store/collaborator details stay in the server log.
    message = "Service temporarily unavailable" if status == 503 else str(exc)
    return jsonify({"success": False, "error": code, "message": message}), status


def system_error_response(message: str):
    return jsonify({"success": False, "error": "internal_error", "message": message}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def participant_id_from(payload: dict):
    """Explicit participant_id in the body wins; otherwise the logged-in participant."""
    value = payload.get("participant_id")
    if value in (None, ""):
        value = session.get("participant_id")
    return value
