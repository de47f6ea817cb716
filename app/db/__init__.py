"""Core application modules."""

from app.db.database import (
    async_session_maker,
    close_db,
    create_tables,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "engine",
    "async_session_maker",
    "create_tables",
    "get_session",
    "init_db",
    "close_db",
    "transaction",
]
