from logging import getLogger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import DUPLICATE_USER_MESSAGE, file_logger
from app.errors.base import BaseAppError, create_exception_handler, error_response
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    """Base exception for database errors."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails."""

    def __init__(
        self,
        detail: str = "Failed to connect to the database",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DatabaseInitializationError(DatabaseError):
    """Exception raised when database initialization fails."""

    def __init__(
        self,
        detail: str = "Failed to initialize database",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique username or email is already taken."""

    def __init__(
        self,
        detail: str = DUPLICATE_USER_MESSAGE,
    ) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class RecordNotFoundError(DatabaseError):
    """Exception raised when a record is not found."""

    def __init__(
        self,
        detail: str = "Record not found",
    ) -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


async def store_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Surface unexpected store failures verbatim as a 500."""
    logger.error(f"Store error for ip: {host(request)} at endpoint {request.url.path}: {exc}")
    return error_response(str(exc), HTTP_500_INTERNAL_SERVER_ERROR)


database_exception_handler = create_exception_handler(logger)
