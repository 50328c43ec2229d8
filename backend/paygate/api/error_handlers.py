"""Error Handlers — global exception handlers for the Paygate API.

Invariants:
    - PaygateError → structured JSON with error code, message, severity, context
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details
    - Every handled error is logged with error_code, user_id, request_id and path

Design Decisions:
    - Three-layer handler: domain (PaygateError), validation (Pydantic), catch-all (Exception)
    - Caller headers fill any context the raising code did not know
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from paygate.core.errors import PaygateError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_paygate_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_extra(request: Request) -> dict:
    return {
        "user_id": request.headers.get("X-User-Id"),
        "request_id": request.headers.get("X-Request-Id"),
        "path": request.url.path,
    }


def _register_paygate_error_handler(app: FastAPI) -> None:
    """Register Paygate domain/infrastructure error handler."""

    @app.exception_handler(PaygateError)
    async def paygate_error_handler(request: Request, exc: PaygateError):
        """Handle all Paygate domain/infrastructure errors."""
        extra = _request_extra(request)
        exc.context.user_id = exc.context.user_id or extra["user_id"]
        exc.context.request_id = exc.context.request_id or extra["request_id"]
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"PaygateError: {exc.message}",
            extra={**extra, "error_code": exc.code},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={**_request_extra(request), "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={**_request_extra(request), "error_code": "INTERNAL_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
