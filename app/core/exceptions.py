"""
Domain exceptions and the global FastAPI exception handlers.

Every error response uses the same JSON envelope::

    {"error": "<human-readable description>"}

Request-validation failures additionally carry a ``details`` list.
Services raise the exceptions below without importing FastAPI; the handlers
registered by :func:`add_exception_handlers` translate them to responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.resilience import CircuitBreakerError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error. Please contact support."


# ────────────────────────────────────────────────────────────────────────────
# Domain exceptions  (raised by service layer, caught by handlers below)
# ────────────────────────────────────────────────────────────────────────────


class AppException(Exception):
    """Base exception for all application-level errors."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestException(AppException):
    """Malformed request or missing required fields (400)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(status_code=400, message=message, details=details)


class UnauthorizedException(AppException):
    """Supplied credentials do not match (401)."""

    def __init__(self, message: str):
        super().__init__(status_code=401, message=message)


class ForbiddenException(AppException):
    """Resource exists but access is not permitted in its current state (403)."""

    def __init__(self, message: str):
        super().__init__(status_code=403, message=message)


class NotFoundException(AppException):
    """Resource not found (404)."""

    def __init__(self, message: str):
        super().__init__(status_code=404, message=message)


class MalformedVentureIdList(AppException):
    """
    A stored venture id list could not be decoded (500).

    This is a data-integrity failure, not a client error, so the raw value
    stays in the logs and the caller only sees the generic message.
    """

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(status_code=500, message=GENERIC_ERROR_MESSAGE)


# ────────────────────────────────────────────────────────────────────────────
# FastAPI exception handler registration
# ────────────────────────────────────────────────────────────────────────────


def add_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI application instance."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle domain-specific exceptions raised by the service layer."""
        if exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %r",
                type(exc).__name__,
                request.method,
                request.url.path,
                getattr(exc, "raw", exc.message),
            )
        content: dict = {"error": exc.message}
        if exc.details is not None:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(CircuitBreakerError)
    async def circuit_breaker_handler(
        request: Request, exc: CircuitBreakerError
    ) -> JSONResponse:
        """Database circuit is open: an internal failure, with a retry hint."""
        logger.warning("Circuit open, rejecting %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR_MESSAGE},
            headers={"Retry-After": str(int(exc.retry_after) + 1)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle standard HTTP exceptions (e.g. 404 from path-not-found)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """
        Malformed bodies and wrong field types are client errors (400).

        The ``details`` list names each offending field so callers can map
        errors back to form inputs.
        """
        errors = []
        for err in exc.errors():
            loc = " -> ".join(str(part) for part in err["loc"])
            errors.append({"field": loc, "message": err["msg"]})
        return JSONResponse(
            status_code=400,
            content={"error": "Validation failed", "details": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected exceptions: log with traceback, return generic 500."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR_MESSAGE},
        )
