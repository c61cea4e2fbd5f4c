"""Map domain exceptions to HTTP responses.

Every error kind keeps its own status code so clients can tell a
business rejection (404/409/422, do not retry) from an aborted
transaction (503, safe to resubmit unchanged).
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ims.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    TransactionAbortedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = {
    EntityNotFoundError: (404, "NotFound"),
    InsufficientStockError: (409, "InsufficientStock"),
    ValidationError: (422, "InvalidInput"),
    TransactionAbortedError: (503, "TransactionAborted"),
}


def error_body(kind: str, detail: str, status: int, **extra):
    return jsonify({"error": kind, "detail": detail, **extra}), status


def status_for(exc: DomainException) -> tuple[int, str]:
    """Status and error kind of the nearest mapped class in the MRO."""
    for cls in type(exc).__mro__:
        if cls in _STATUS:
            return _STATUS[cls]
    return 400, "DomainError"


def _handle_domain_exception(exc: DomainException):
    status, kind = status_for(exc)
    if status >= 500:
        logger.warning("request_failed kind=%s detail=%s", kind, exc)
    else:
        logger.info("request_rejected kind=%s detail=%s", kind, exc)

    extra: dict = {}
    if isinstance(exc, InsufficientStockError):
        extra = {"requested": exc.requested, "available": exc.available}
    response, code = error_body(kind, str(exc), status, **extra)
    if exc.retryable:
        response.headers["Retry-After"] = "1"
    return response, code


def _handle_http_exception(exc: HTTPException):
    return error_body(exc.name.replace(" ", ""), exc.description or exc.name, exc.code or 500)


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(DomainException, _handle_domain_exception)
    app.register_error_handler(HTTPException, _handle_http_exception)
