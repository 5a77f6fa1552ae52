"""Error Handlers — every failure leaves the API in the PostboardError envelope.

Invariants:
    - PostboardError → its own to_response() at its own http_status
    - RequestValidationError (malformed body/query/form) → 400 VALIDATION_ERROR
      whose data uses the same [{"message": "<field>: <msg>"}] entries as a 422
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - The request path is recorded on the error context and in the log record

Design Decisions:
    - Non-domain failures are wrapped in a PostboardError before rendering, so
      there is exactly one envelope builder (PostboardError.to_response)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, PostboardError, field_errors,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(PostboardError)
    async def postboard_error_handler(request: Request, exc: PostboardError):
        return _render(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return _render(request, PostboardError(
            "Invalid request data.",
            "VALIDATION_ERROR",
            ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING,
            http_status=status.HTTP_400_BAD_REQUEST,
            data=field_errors(exc.errors()),
        ))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}", exc_info=True,
        )
        return _render(request, PostboardError(
            "An unexpected error occurred.",
            "INTERNAL_ERROR",
            ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ))


def _render(request: Request, exc: PostboardError) -> JSONResponse:
    exc.context = exc.context or ErrorContext()
    exc.context.operation = exc.context.operation or request.url.path
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
