"""Error Handlers: global exception handlers for the Users API.

Invariants:
    - UserApiError → {"error": message} with the error's own status code
    - RequestValidationError → 400 {"error", "details"} with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - No handler retries anything; request failures are final

Design Decisions:
    - Three-layer handler: domain (UserApiError), validation (Pydantic), catch-all (Exception)
    - Log level follows the error's severity (WARNING for 4xx, CRITICAL for DatabaseError)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_api.core.errors import ErrorSeverity, UserApiError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_user_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_user_api_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(UserApiError)
    async def user_api_error_handler(request: Request, exc: UserApiError):
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
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
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Invalid request data",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
