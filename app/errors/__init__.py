from app.errors.base import (
    BaseAppError,
    app_exception_handler,
    create_exception_handler,
    error_response,
    http_exception_handler,
    unhandled_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
    store_exception_handler,
)
from app.errors.validation import (
    InvalidIdError,
    MissingReferenceError,
    ValidationError,
    format_validation_errors,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "InvalidIdError",
    "MissingReferenceError",
    "RecordNotFoundError",
    "ValidationError",
    "app_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_response",
    "format_validation_errors",
    "http_exception_handler",
    "store_exception_handler",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
