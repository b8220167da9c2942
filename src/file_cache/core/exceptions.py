"""Custom exception handlers for consistent error responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from file_cache.logging import get_logger
from file_cache.services.results import ErrorType

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

    from file_cache.services.results import StoreResult

__all__ = [
    "ERROR_CODES",
    "ServiceError",
    "register_exception_handlers",
    "service_error_from_result",
    "service_error_handler",
    "unhandled_exception_handler",
]

ERROR_CODES: dict[ErrorType, str] = {
    ErrorType.BAD_REQUEST: "bad_request",
    ErrorType.NOT_FOUND: "not_found",
    ErrorType.CONFLICT: "conflict",
    ErrorType.INTERNAL: "internal_error",
}


class ServiceError(Exception):
    """
    Base exception for service errors.

    Attributes:
        error: Machine-readable error code
        message: Human-readable description
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int,
        details: dict[str, object] | None,
    ) -> None:
        self.error = error
        self.message = message
        self.status_code = status_code
        if details is None:
            self.details: dict[str, object] = {}
        else:
            self.details = details
        super().__init__(message)


def service_error_from_result(result: StoreResult) -> ServiceError:
    """Map a failed store result to a ServiceError with the same status."""
    error_type = result.error_type if result.error_type is not None else ErrorType.INTERNAL
    details: dict[str, object] = {}
    if result.digest:
        details["digest"] = result.digest
    return ServiceError(
        error=ERROR_CODES[error_type],
        message=result.error_msg or "Unknown content store error.",
        status_code=int(error_type),
        details=details,
    )


async def service_error_handler(
    request: Request,
    exc: ServiceError,
) -> JSONResponse:
    """Handle ServiceError exceptions."""
    logger = get_logger(__name__)
    logger.warning(
        "Service error",
        extra={
            "error_code": exc.error,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "details": exc.details,
            "path": str(request.url.path),
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger = get_logger(__name__)
    logger.exception(
        "Unhandled exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": {
                "exception_type": exc.__class__.__name__,
                "path": str(request.url.path),
                "method": request.method,
            },
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
