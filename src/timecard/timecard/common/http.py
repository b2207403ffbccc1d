from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    NotFound,
    StateConflict,
    StoreFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (StateConflict, 400),
    (AuthenticationError, 401),
    (NotFound, 404),
)


def json_error(status: int, error: str, message: str):
    return jsonify({"success": False, "error": error, "message": message}), status


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    """Map the domain error taxonomy onto JSON error responses."""

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return json_error(status_for(exc), type(exc).__name__, str(exc))

    @app.errorhandler(StoreFailure)
    def _store_failure(exc: StoreFailure):
        logger.error("Store failure on %s %s: %s", request.method, request.path, exc)
        return json_error(500, "StoreFailure", "Internal server error")

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return json_error(exc.code or 500, exc.name.replace(" ", ""), exc.description or exc.name)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return json_error(500, "InternalServerError", "Internal server error")
