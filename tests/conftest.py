# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the app or its settings are imported anywhere
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import AsyncGenerator  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession  # noqa: E402

from app.db import create_tables, get_session, transaction  # noqa: E402
from app.main import app  # noqa: E402
from app.models import BlogDB, CommentDB, UserDB  # noqa: E402
from app.utils.helpers import utc_now  # noqa: E402


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with the full schema, shared by every session of a test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for repository and service tests."""
    async with session_maker() as db_session:
        yield db_session


async def _bound_client(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
    raise_app_exceptions: bool,
) -> AsyncGenerator[AsyncClient]:
    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
    ) as ac:
        yield ac
    app.dependency_overrides = {}


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the test database."""
    async for ac in _bound_client(session_maker, raise_app_exceptions=True):
        yield ac


@pytest.fixture
async def server_error_client(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Client that returns the rendered 500 response instead of re-raising the server error."""
    async for ac in _bound_client(session_maker, raise_app_exceptions=False):
        yield ac


@dataclass
class Seeder:
    """Insert rows directly, bypassing the API, each in its own committed transaction."""

    session_maker: async_sessionmaker[SQLModelAsyncSession]

    async def _add[RowT: (UserDB, BlogDB, CommentDB)](self, row: RowT) -> RowT:
        async with transaction(self.session_maker) as db_session:
            db_session.add(row)
            await db_session.flush()
            await db_session.refresh(row)
        return row

    async def user(
        self,
        username: str,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
    ) -> UserDB:
        return await self._add(
            UserDB(
                username=username,
                email=email or f"{username}@example.com",
                first_name=first_name,
                last_name=last_name,
            ),
        )

    async def blog(
        self,
        author: UserDB,
        title: str,
        content: str = "Some meaningful blog content.",
        created_at: datetime | None = None,
    ) -> BlogDB:
        timestamp = created_at or utc_now()
        return await self._add(
            BlogDB(
                author_id=author.id,
                title=title,
                content=content,
                created_at=timestamp,
                updated_at=timestamp,
            ),
        )

    async def comment(
        self,
        blog: BlogDB,
        user: UserDB,
        content: str = "Nice post",
        note: int | None = None,
    ) -> CommentDB:
        return await self._add(
            CommentDB(blog_id=blog.id, user_id=user.id, content=content, note=note),
        )


@pytest.fixture
def seed(session_maker: async_sessionmaker[SQLModelAsyncSession]) -> Seeder:
    return Seeder(session_maker)
