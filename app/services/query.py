"""Composition of filtering, resolution and sorting for the list endpoints."""

from logging import getLogger
from uuid import UUID

from app.configs import file_logger
from app.models import BlogDB, UserDB
from app.repositories import BlogRepository, CommentRepository, UserRepository
from app.schemas.query import BlogQuery, UserQuery
from app.services.filters import build_blog_filters, build_user_filters
from app.services.resolver import CrossEntityResolver
from app.services.sorting import (
    BLOG_AGGREGATE_FIELDS,
    USER_AGGREGATE_FIELDS,
    sort_blogs,
    sort_users,
)

logger = file_logger(getLogger(__name__))


class QueryComposer:
    """
    Run list queries for blogs and users.

    A blog listing resolves name filters into ID sets, fetches the matching
    blogs, loads their authors and finally sorts in memory. Comment
    aggregates are only queried when the sort field needs them, and only
    for the fetched candidates.
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
        self.resolver = CrossEntityResolver(user_repo, comment_repo)

    async def list_blogs(self, query: BlogQuery) -> tuple[list[BlogDB], dict[UUID, UserDB]]:
        """
        List blogs matching a query.

        Args:
            query: Parsed ``GET /blogs`` query

        Returns:
            tuple[list[BlogDB], dict[UUID, UserDB]]: Ordered blogs and their
            authors keyed by ID.
        """
        author_ids = None
        if query.author_name is not None:
            author_ids = await self.resolver.author_ids(query.author_name)

        blog_ids = None
        if query.commenter_name is not None:
            blog_ids = await self.resolver.commented_blog_ids(query.commenter_name)

        clauses = build_blog_filters(query, author_ids=author_ids, blog_ids=blog_ids)
        blogs = await self.blog_repo.find(clauses)
        authors = await self.user_repo.get_many(blog.author_id for blog in blogs)

        stats = None
        if query.sort is not None and query.sort.field in BLOG_AGGREGATE_FIELDS:
            stats = await self.comment_repo.stats_by_blog(blog.id for blog in blogs)

        logger.debug(f"Blog query matched {len(blogs)} blog(s), sort={query.sort}")
        return sort_blogs(blogs, query.sort, authors=authors, stats=stats), authors

    async def list_users(self, query: UserQuery) -> list[UserDB]:
        """
        List users matching a query.

        Args:
            query: Parsed ``GET /users`` query

        Returns:
            list[UserDB]: Ordered users
        """
        users = await self.user_repo.find(build_user_filters(query))

        counts = None
        if query.sort is not None and query.sort.field in USER_AGGREGATE_FIELDS:
            counts = await self.comment_repo.counts_by_user(user.id for user in users)

        return sort_users(users, query.sort, comment_counts=counts)
