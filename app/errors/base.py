from collections.abc import Awaitable, Callable
from logging import Logger, getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import file_logger
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def error_response(detail: str, status_code: int) -> ORJSONResponse:
    """Build the `{"error": ...}` body shared by every failure response."""
    return ORJSONResponse(content={"error": detail}, status_code=status_code)


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        # Default values
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = "Internal Server Error"

        # Extract from custom exception if available
        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        return error_response(detail, status_code)

    return handler


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render `HTTPException` raised by routes or routing with the error envelope."""
    http_exc = cast(HTTPException, exc)
    logger.warning(
        f"{http_exc.detail} for ip: {host(request)} for endpoint {request.url.path}",
    )
    response = error_response(str(http_exc.detail), http_exc.status_code)
    if http_exc.headers:
        response.headers.update(http_exc.headers)
    return response


app_exception_handler = create_exception_handler(logger)


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render an exception no other handler claims as a 500 carrying its message."""
    logger.error(
        f"Unhandled error for ip: {host(request)} at endpoint {request.url.path}: {exc!r}",
        exc_info=exc,
    )
    return error_response(str(exc) or "Internal Server Error", HTTP_500_INTERNAL_SERVER_ERROR)
