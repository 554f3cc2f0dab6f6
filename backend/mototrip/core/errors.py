"""
Domain exceptions and their translation to HTTP responses.

Route handlers and services raise the exceptions below; the handlers at the
bottom of this module are registered on the FastAPI app and turn them into
JSON bodies of the form ``{"error": <code>, "detail": <message>}``.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "The record was modified by another user. Please refresh and try again."

_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


class AppError(Exception):
    """Base exception for all application errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class TripAccessDeniedError(AppError):
    """Caller is not a member of the trip or lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"

    def __init__(self, trip_id: int, user_id: int, message: str = None):
        self.trip_id = trip_id
        self.user_id = user_id
        super().__init__(message or f"User '{user_id}' does not have access to trip '{trip_id}'")


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class ConcurrencyConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"

    def __init__(self, message: str = CONFLICT_MESSAGE):
        super().__init__(message)


def _error_response(status_code: int, code: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "detail": detail})


def app_error_handler(request: Request, exc: AppError):  # type: ignore
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.code, exc.message)


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    code = _ERROR_CODES.get(exc.status_code, "http_error")
    response = _error_response(exc.status_code, code, exc.detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    # pydantic error contexts may carry exception instances
    errors = [
        {k: (str(v) if k == "ctx" else v) for k, v in err.items() if k != "input"}
        for err in exc.errors()
    ]
    return _error_response(status.HTTP_400_BAD_REQUEST, "validation_error", errors)


def stale_data_handler(request: Request, exc: StaleDataError):  # type: ignore
    logger.warning(f"Concurrency conflict on {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_409_CONFLICT, "conflict", CONFLICT_MESSAGE)


MYSQL_DUPLICATE_ENTRY = 1062


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the failed statement hit a unique constraint."""
    args = getattr(exc.orig, "args", ())
    if args and args[0] == MYSQL_DUPLICATE_ENTRY:
        return True
    return "unique" in str(exc.orig).lower()


def integrity_error_handler(request: Request, exc: IntegrityError):  # type: ignore
    if not is_unique_violation(exc):
        # NOT NULL and foreign key failures mean a request slipped past validation
        logger.error(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred. Please try again later.",
        )

    logger.warning(f"Duplicate record on {request.method} {request.url.path}: {exc.orig}")
    return _error_response(
        status.HTTP_409_CONFLICT, "conflict", "The request conflicts with existing data."
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app) -> None:
    """Attach every handler in this module to the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StaleDataError, stale_data_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
