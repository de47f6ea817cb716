"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import file_logger, settings
from app.errors import BaseAppError

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_size=settings.POOL_SIZE,
    max_overflow=settings.MAX_OVERFLOW,
    pool_timeout=settings.POOL_TIMEOUT,
    pool_recycle=settings.POOL_RECYCLE,
    pool_pre_ping=True,
    connect_args={
        "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
        "server_settings": {
            "statement_timeout": str(STATEMENT_TIMEOUT_MS),
            "lock_timeout": str(STATEMENT_TIMEOUT_MS),
        },
    },
)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Every store operation of one request runs on this session and is
    committed together when the request completes.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] = async_session_maker,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Args:
        session_maker: Session factory to open the session from.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(UserDB(username="test", email="test@example.com"))
            # Commits on successful exit, rolls back on exception; only
            # unexpected errors are logged at error level
        ```
    """
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseAppError as e:
            await session.rollback()
            logger.debug(f"Transaction rolled back: {e.detail}")
            raise
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        finally:
            await session.close()


async def create_tables(target: AsyncEngine) -> None:
    """Create every table registered on the SQLModel metadata."""
    async with target.begin() as conn:
        # Import all models to ensure they are registered
        from app.models import BlogDB, CommentDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)


async def init_db() -> None:
    """
    Initialize database tables.

    This function creates all tables defined in SQLModel models.
    It should be called on application startup.

    Note:
        This is a simple initialization for development.
        For production, use proper migration tools like Alembic.
    """
    await create_tables(engine)
    logger.info("Database initialized successfully!")


async def close_db() -> None:
    """
    Close database connections.

    This function should be called on application shutdown
    to properly close all database connections.
    """
    await engine.dispose()
    logger.info("Database connections closed")
