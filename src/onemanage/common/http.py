"""JSON envelope helpers shared by the controllers.

Every response is ``{"success": bool, "message"?: str, "data"?: ..., ...}``.
Domain errors map to fixed status codes; anything else is an internal error.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DeliveryError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DeliveryError, 500),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200, **extra: Any):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_endpoint(view):
    """Translate the error taxonomy raised inside a view into envelopes."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            status = status_for(e)
            if status >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, e)
            return fail(str(e), status)
        except Exception as e:
            logger.exception("%s %s raised an unhandled error", request.method, request.path)
            if bool(current_app.config.get("DEBUG", False)):
                return fail(f"Internal Server Error: {e}", 500)
            return fail("Internal Server Error", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
