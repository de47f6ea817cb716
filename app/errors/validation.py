"""Custom validation error handling for FastAPI."""

from collections.abc import Sequence
from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.configs import INVALID_ID_MESSAGE, file_logger
from app.errors.base import BaseAppError, error_response
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))

# Location prefixes FastAPI puts in front of the field path
_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


class ValidationError(BaseAppError):
    """Custom validation error class."""

    def __init__(self, detail: str = "Validation Error") -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


class InvalidIdError(ValidationError):
    """Raised when a path identifier is not a well-formed identity key."""

    def __init__(self, detail: str = INVALID_ID_MESSAGE) -> None:
        super().__init__(detail)


class MissingReferenceError(ValidationError):
    """Raised when a payload references a user or author that does not exist."""

    def __init__(self, detail: str = "Referenced record does not exist") -> None:
        super().__init__(detail)


def format_validation_errors(errors: Sequence[Any]) -> str:
    """
    Flatten pydantic error entries into one readable message.

    Args:
        errors: Entries as returned by `RequestValidationError.errors()`.

    Returns:
        Messages of the form ``field: reason`` joined with ``; ``.
    """
    messages: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATIONS]
        field = ".".join(loc)
        message = error.get("msg", "Invalid value")
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages) or "Validation failed"


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors as 400 responses.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with the flattened validation message.
    """
    exec_error = cast(RequestValidationError, exc)
    message = format_validation_errors(exec_error.errors())

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {message}",
    )

    return error_response(message, HTTP_400_BAD_REQUEST)
