"""Application-level cascade deletes."""

from logging import getLogger
from uuid import UUID

from app.configs import file_logger
from app.models import BlogDB, UserDB
from app.repositories import BlogRepository, CommentRepository, UserRepository

logger = file_logger(getLogger(__name__))


class ReferentialCleanup:
    """
    Delete blogs and users together with the records that depend on them.

    The database declares no cascading foreign keys; dependents are removed
    here, children before parents. All statements run on the caller's
    session, so they commit or roll back together with the request.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        blog_repo: BlogRepository,
        comment_repo: CommentRepository,
    ) -> None:
        self.user_repo = user_repo
        self.blog_repo = blog_repo
        self.comment_repo = comment_repo

    async def delete_blog(self, blog: BlogDB) -> None:
        """
        Delete a blog and every comment on it.

        Args:
            blog: Loaded blog to delete
        """
        await self.comment_repo.delete_by_blogs([blog.id])
        await self.blog_repo.delete(blog.id)
        logger.info(f"Blog {blog.id} deleted")

    async def delete_user(self, user: UserDB) -> None:
        """
        Delete a user, their blogs with those blogs' comments, and their comments.

        A comment the user left on somebody else's blog is removed; that blog
        and its other comments stay.

        Args:
            user: Loaded user to delete
        """
        user_id: UUID = user.id
        blog_ids = await self.blog_repo.ids_by_author(user_id)
        await self.comment_repo.delete_by_blogs(blog_ids)
        await self.comment_repo.delete_by_user(user_id)
        await self.blog_repo.delete_by_author(user_id)
        await self.user_repo.delete(user_id)
        logger.info(f"User {user_id} deleted with {len(blog_ids)} blog(s)")
