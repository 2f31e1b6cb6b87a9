"""
Service error taxonomy and their HTTP mapping.

Services raise these exceptions; endpoints let them propagate and the
handlers registered by :func:`register_error_handlers` turn them into
JSON responses.  Each error carries an optional ``field`` so clients
can point at the offending input.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(ServiceError, ValueError):
    """Malformed input, rejected before any write."""


class NotFoundError(ServiceError):
    """A mutation targeted a record that does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(ServiceError):
    """A status change is not allowed from the record's current state."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Illegal status transition: {current} → {requested}", field="status")
        self.current = current
        self.requested = requested


class IntegrityError(ServiceError):
    """Stored data violates a uniqueness invariant."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(ServiceError):
    """The document store failed to read or write."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, error: ServiceError) -> JSONResponse:
        if error.status_code >= 500:
            logger.error("%s on %s %s: %s", type(error).__name__, request.method, request.url.path, error)
        body = {"error": type(error).__name__, "message": error.message}
        if error.field:
            body["field"] = error.field
        return JSONResponse(status_code=error.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
        first = error.errors()[0] if error.errors() else {}
        location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
        body = {"error": "ValidationError", "message": first.get("msg", "Invalid request")}
        if location:
            body["field"] = ".".join(location)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)
