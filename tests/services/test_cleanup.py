# tests/services/test_cleanup.py
"""Tests for app/services/cleanup.py module."""

from unittest.mock import AsyncMock, MagicMock, call
from uuid import uuid4

import pytest

from app.models import BlogDB, UserDB
from app.services.cleanup import ReferentialCleanup


@pytest.fixture
def repos() -> MagicMock:
    """Repositories attached to one parent mock, so call order is recorded across them."""
    parent = MagicMock()
    parent.users = AsyncMock()
    parent.blogs = AsyncMock()
    parent.comments = AsyncMock()
    return parent


@pytest.fixture
def cleanup(repos: MagicMock) -> ReferentialCleanup:
    return ReferentialCleanup(repos.users, repos.blogs, repos.comments)


class TestDeleteBlog:
    @pytest.mark.asyncio
    async def test_comments_go_before_the_blog(
        self,
        cleanup: ReferentialCleanup,
        repos: MagicMock,
    ) -> None:
        blog = BlogDB(id=uuid4(), author_id=uuid4(), title="Some title", content="Some content")

        await cleanup.delete_blog(blog)

        assert repos.mock_calls == [
            call.comments.delete_by_blogs([blog.id]),
            call.blogs.delete(blog.id),
        ]


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_children_go_before_parents(
        self,
        cleanup: ReferentialCleanup,
        repos: MagicMock,
    ) -> None:
        user = UserDB(id=uuid4(), username="doomed", email="doomed@example.com")
        blog_ids = [uuid4(), uuid4()]
        repos.blogs.ids_by_author.return_value = blog_ids

        await cleanup.delete_user(user)

        assert repos.mock_calls == [
            call.blogs.ids_by_author(user.id),
            call.comments.delete_by_blogs(blog_ids),
            call.comments.delete_by_user(user.id),
            call.blogs.delete_by_author(user.id),
            call.users.delete(user.id),
        ]

    @pytest.mark.asyncio
    async def test_failure_stops_the_cascade(
        self,
        cleanup: ReferentialCleanup,
        repos: MagicMock,
    ) -> None:
        user = UserDB(id=uuid4(), username="doomed", email="doomed@example.com")
        repos.blogs.ids_by_author.return_value = []
        repos.comments.delete_by_user.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            await cleanup.delete_user(user)

        repos.blogs.delete_by_author.assert_not_called()
        repos.users.delete.assert_not_called()
