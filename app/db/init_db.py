"""
Database initialization and verification script.

This script verifies database connectivity and creates missing tables.
It can be run independently or as part of the application startup.

Note:
    Production schema is managed by Alembic migrations.
    Run 'alembic upgrade head' to apply migrations.
"""

from asyncio import run as asyncio_run
from logging import getLogger

from app.configs import file_logger
from app.db.database import close_db, init_db
from app.errors.database import DatabaseInitializationError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Verify database connection and create tables."""
    try:
        logger.info("Verifying database connection...")
        await init_db()
        logger.info("Database ready!")
    except Exception as e:
        logger.exception("Failed to connect to database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
