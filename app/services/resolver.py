"""Resolution of name filters into identity sets."""

from logging import getLogger
from uuid import UUID

from app.configs import file_logger
from app.repositories import CommentRepository, UserRepository

logger = file_logger(getLogger(__name__))


class CrossEntityResolver:
    """
    Translate author and commenter name filters into ID sets.

    Names are matched as case-insensitive substrings of a user's first name,
    last name or username. Lookups run one after the other since each one
    depends on the previous result.
    """

    def __init__(self, user_repo: UserRepository, comment_repo: CommentRepository) -> None:
        self.user_repo = user_repo
        self.comment_repo = comment_repo

    async def author_ids(self, name: str) -> set[UUID]:
        """
        Get the IDs of users whose name matches, to filter blogs by author.

        Args:
            name: Author name fragment

        Returns:
            set[UUID]: Author IDs; empty when nobody matches
        """
        return await self.user_repo.ids_matching_name(name)

    async def commented_blog_ids(self, name: str) -> set[UUID]:
        """
        Get the IDs of blogs commented on by any user whose name matches.

        Args:
            name: Commenter name fragment

        Returns:
            set[UUID]: Blog IDs; empty when no user matches or none commented
        """
        user_ids = await self.user_repo.ids_matching_name(name)
        if not user_ids:
            return set()
        blog_ids = await self.comment_repo.distinct_blog_ids(user_ids)
        logger.debug(f"Commenter '{name}' resolved to {len(blog_ids)} blog(s)")
        return blog_ids
