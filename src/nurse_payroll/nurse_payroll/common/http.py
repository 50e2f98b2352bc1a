from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def status_for(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, ValidationError):
        return 400
    return 422


def error_response(error: Exception):
    """JSON error body for a failed API call.

    Domain errors carry their own message; anything else is logged and hidden.
    """
    if isinstance(error, DomainError):
        return jsonify({"success": False, "message": str(error)}), status_for(error)
    logger.exception("Unhandled error in %s %s", request.method, request.path)
    return jsonify({"success": False, "message": "Internal server error"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_int_arg(name: str):
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def optional_str_arg(name: str):
    value = (request.args.get(name) or "").strip()
    return value or None
