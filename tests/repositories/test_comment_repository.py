# tests/repositories/test_comment_repository.py
"""Tests for app/repositories/comment.py module."""

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import CommentRepository, CommentStats

if TYPE_CHECKING:
    from conftest import Seeder


@pytest.fixture
def repo(session: AsyncSession) -> CommentRepository:
    return CommentRepository(session)


class TestCommentLookups:
    @pytest.mark.asyncio
    async def test_get_by_blog_and_user(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        reader = await seed.user("reader")
        blog = await seed.blog(author, "A post")
        other = await seed.blog(author, "Another post")
        first = await seed.comment(blog, reader, "first")
        second = await seed.comment(blog, author, "second")
        elsewhere = await seed.comment(other, reader, "elsewhere")

        assert [c.id for c in await repo.get_by_blog(blog.id)] == [first.id, second.id]
        assert [c.id for c in await repo.get_by_user(reader.id)] == [first.id, elsewhere.id]

    @pytest.mark.asyncio
    async def test_distinct_blog_ids(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        reader = await seed.user("reader")
        blog = await seed.blog(author, "A post")
        await seed.comment(blog, reader)
        await seed.comment(blog, reader)

        assert await repo.distinct_blog_ids({reader.id}) == {blog.id}
        assert await repo.distinct_blog_ids({author.id}) == set()
        assert await repo.distinct_blog_ids([]) == set()


class TestCommentAggregates:
    @pytest.mark.asyncio
    async def test_stats_by_blog(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        reader = await seed.user("reader")
        rated = await seed.blog(author, "Rated")
        silent = await seed.blog(author, "Silent")
        await seed.comment(rated, reader, note=4)
        await seed.comment(rated, reader, note=None)
        await seed.comment(rated, reader, note=5)

        stats = await repo.stats_by_blog([rated.id, silent.id])

        assert stats == {rated.id: CommentStats(count=3, note_total=9)}
        assert stats[rated.id].average_note == 3.0

    @pytest.mark.asyncio
    async def test_stats_without_candidates(self, repo: CommentRepository) -> None:
        assert await repo.stats_by_blog([]) == {}

    @pytest.mark.asyncio
    async def test_counts_by_user(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        reader = await seed.user("reader")
        blog = await seed.blog(author, "A post")
        await seed.comment(blog, reader)
        await seed.comment(blog, reader)

        assert await repo.counts_by_user([author.id, reader.id]) == {reader.id: 2}


class TestCommentDeletes:
    @pytest.mark.asyncio
    async def test_delete_by_blogs(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        doomed = await seed.blog(author, "Doomed")
        kept = await seed.blog(author, "Kept")
        await seed.comment(doomed, author)
        await seed.comment(doomed, author)
        survivor = await seed.comment(kept, author)

        assert await repo.delete_by_blogs([doomed.id]) == 2
        assert await repo.delete_by_blogs([]) == 0
        assert [c.id for c in await repo.get_by_user(author.id)] == [survivor.id]

    @pytest.mark.asyncio
    async def test_delete_by_user(self, repo: CommentRepository, seed: "Seeder") -> None:
        author = await seed.user("author")
        reader = await seed.user("reader")
        blog = await seed.blog(author, "A post")
        await seed.comment(blog, reader)
        kept = await seed.comment(blog, author)

        assert await repo.delete_by_user(reader.id) == 1
        assert await repo.delete_by_user(uuid4()) == 0
        assert [c.id for c in await repo.get_by_blog(blog.id)] == [kept.id]


class TestBatchedIdLists:
    @pytest.mark.asyncio
    async def test_results_merge_across_batches(
        self,
        repo: CommentRepository,
        seed: "Seeder",
    ) -> None:
        repo.in_batch_size = 2
        author = await seed.user("author")
        readers = [await seed.user(f"reader{n}") for n in range(3)]
        blogs = [await seed.blog(author, f"Post number {n}") for n in range(3)]
        for n, blog in enumerate(blogs):
            for reader in readers[: n + 1]:
                await seed.comment(blog, reader, note=n + 1)

        stats = await repo.stats_by_blog(blog.id for blog in blogs)
        counts = await repo.counts_by_user(reader.id for reader in readers)
        commented = await repo.distinct_blog_ids(reader.id for reader in readers)

        assert {blog.id: stats[blog.id].count for blog in blogs} == {
            blogs[0].id: 1,
            blogs[1].id: 2,
            blogs[2].id: 3,
        }
        assert counts == {readers[0].id: 3, readers[1].id: 2, readers[2].id: 1}
        assert commented == {blog.id for blog in blogs}

        assert await repo.delete_by_blogs(blog.id for blog in blogs) == 6
        assert await repo.counts_by_user(reader.id for reader in readers) == {}
