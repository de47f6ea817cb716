"""Comment repository for database operations."""

from collections.abc import Iterable
from dataclasses import dataclass
from logging import getLogger
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from app.configs import file_logger
from app.models.comment import CommentDB
from app.repositories.base import BaseRepository
from app.schemas.comment import CommentCreate

logger = file_logger(getLogger(__name__))


@dataclass(frozen=True, slots=True)
class CommentStats:
    """Comment count and note total of one blog."""

    count: int = 0
    note_total: int = 0

    @property
    def average_note(self) -> float:
        """Mean note where comments without a note count as 0; 0 without comments."""
        return self.note_total / self.count if self.count else 0.0


class CommentRepository(BaseRepository[CommentDB, CommentCreate, CommentCreate]):
    """
    Repository for Comment database operations.

    Besides the usual lookups this repository answers the aggregate and
    distinct-value queries needed for cross-entity filtering and sorting.
    """

    model = CommentDB

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session."""
        super().__init__(session)

    async def get_by_blog(self, blog_id: UUID) -> list[CommentDB]:
        """
        Get comments of a blog in creation order.

        Args:
            blog_id: Blog ID

        Returns:
            list[CommentDB]: The blog's comments
        """
        return await self.find([col(CommentDB.blog_id) == blog_id])

    async def get_by_user(self, user_id: UUID) -> list[CommentDB]:
        """
        Get comments written by a user in creation order.

        Args:
            user_id: User ID

        Returns:
            list[CommentDB]: The user's comments
        """
        return await self.find([col(CommentDB.user_id) == user_id])

    async def distinct_blog_ids(self, user_ids: Iterable[UUID]) -> set[UUID]:
        """
        Get the distinct IDs of blogs commented on by any of the given users.

        Args:
            user_ids: Commenter IDs

        Returns:
            set[UUID]: Blog IDs, empty when no user is given
        """
        blog_ids: set[UUID] = set()
        for batch in self._batches(user_ids):
            statement = (
                select(col(CommentDB.blog_id))
                .where(col(CommentDB.user_id).in_(batch))
                .distinct()
            )
            result = await self.session.execute(statement)
            blog_ids.update(result.scalars().all())
        return blog_ids

    async def stats_by_blog(self, blog_ids: Iterable[UUID]) -> dict[UUID, CommentStats]:
        """
        Get comment count and note total per blog in one grouped query.

        Args:
            blog_ids: Candidate blog IDs

        Returns:
            dict[UUID, CommentStats]: Stats keyed by blog ID. Blogs without
            comments are absent.
        """
        stats: dict[UUID, CommentStats] = {}
        for batch in self._batches(blog_ids):
            statement = (
                select(
                    col(CommentDB.blog_id),
                    func.count(col(CommentDB.id)),
                    func.coalesce(func.sum(func.coalesce(col(CommentDB.note), 0)), 0),
                )
                .where(col(CommentDB.blog_id).in_(batch))
                .group_by(col(CommentDB.blog_id))
            )
            result = await self.session.execute(statement)
            stats.update(
                (blog_id, CommentStats(count=int(count), note_total=int(note_total)))
                for blog_id, count, note_total in result.all()
            )
        return stats

    async def counts_by_user(self, user_ids: Iterable[UUID]) -> dict[UUID, int]:
        """
        Get the number of comments authored per user in one grouped query.

        Args:
            user_ids: Candidate user IDs

        Returns:
            dict[UUID, int]: Counts keyed by user ID. Users without comments are absent.
        """
        counts: dict[UUID, int] = {}
        for batch in self._batches(user_ids):
            statement = (
                select(col(CommentDB.user_id), func.count(col(CommentDB.id)))
                .where(col(CommentDB.user_id).in_(batch))
                .group_by(col(CommentDB.user_id))
            )
            result = await self.session.execute(statement)
            counts.update((user_id, int(count)) for user_id, count in result.all())
        return counts

    async def delete_by_blogs(self, blog_ids: Iterable[UUID]) -> int:
        """
        Delete every comment belonging to any of the given blogs.

        Args:
            blog_ids: Blog IDs

        Returns:
            int: Number of deleted comments
        """
        batches = self._batches(blog_ids)
        if not batches:
            return 0
        deleted = 0
        for batch in batches:
            deleted += await self.delete_where(col(CommentDB.blog_id).in_(batch))
        logger.info(f"Deleted {deleted} comment(s) of {sum(map(len, batches))} blog(s)")
        return deleted

    async def delete_by_user(self, user_id: UUID) -> int:
        """
        Delete every comment written by a user, whichever blog it is on.

        Args:
            user_id: Commenter ID

        Returns:
            int: Number of deleted comments
        """
        deleted = await self.delete_where(col(CommentDB.user_id) == user_id)
        logger.info(f"Deleted {deleted} comment(s) written by user {user_id}")
        return deleted
