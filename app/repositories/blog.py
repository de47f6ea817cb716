"""Blog repository for database operations."""

from logging import getLogger
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from app.configs import file_logger
from app.models.blog import BlogDB
from app.repositories.base import BaseRepository
from app.schemas.blog import BlogCreate, BlogUpdate

logger = file_logger(getLogger(__name__))


class BlogRepository(BaseRepository[BlogDB, BlogCreate, BlogUpdate]):
    """
    Repository for Blog database operations.

    This class implements the repository pattern for Blog entities,
    providing CRUD operations and the author-scoped lookups used by the
    cleanup service.
    """

    model = BlogDB

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session."""
        super().__init__(session)

    async def get_by_author(self, author_id: UUID) -> list[BlogDB]:
        """
        Get blogs written by an author, in creation order.

        Args:
            author_id: Author UUID

        Returns:
            list[BlogDB]: The author's blogs
        """
        return await self.find([col(BlogDB.author_id) == author_id])

    async def ids_by_author(self, author_id: UUID) -> list[UUID]:
        """
        Get the IDs of every blog written by an author.

        Args:
            author_id: Author UUID

        Returns:
            list[UUID]: Blog IDs
        """
        result = await self.session.execute(
            select(col(BlogDB.id)).where(col(BlogDB.author_id) == author_id),
        )
        return list(result.scalars().all())

    async def delete_by_author(self, author_id: UUID) -> int:
        """
        Delete every blog written by an author.

        Comments on those blogs are not touched here.

        Args:
            author_id: Author UUID

        Returns:
            int: Number of deleted blogs
        """
        deleted = await self.delete_where(col(BlogDB.author_id) == author_id)
        logger.info(f"Deleted {deleted} blog(s) of author {author_id}")
        return deleted
