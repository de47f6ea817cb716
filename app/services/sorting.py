"""
In-memory ordering of materialized list results.

Every sort here is Python's stable sort, so items with equal keys keep the
order the store returned them in, for either direction.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any
from unicodedata import category, normalize
from uuid import UUID

from app.models import BlogDB, UserDB
from app.repositories import CommentStats
from app.schemas.query import SortSpec

type SortKey = Callable[[Any], Any]

_NO_COMMENTS = CommentStats()

# Sort fields whose keys need a comment aggregate before sorting
BLOG_AGGREGATE_FIELDS = frozenset({"commentsCount", "avgNote"})
USER_AGGREGATE_FIELDS = frozenset({"commentsCount"})


def collation_key(text: str | None) -> tuple[str, str, str]:
    """
    Locale-style comparison key.

    Strings compare first ignoring accents and case, then by accents, then
    with lower case before upper case.

    Args:
        text: Value to compare; None compares as the empty string.

    Returns:
        tuple[str, str, str]: Primary, secondary and tertiary keys.
    """
    value = text or ""
    folded = value.casefold()
    base = "".join(ch for ch in normalize("NFKD", folded) if category(ch) != "Mn")
    return base, folded, value.swapcase()


def author_name(author: UserDB | None) -> str:
    """Last name followed by first name; empty for a missing author."""
    if author is None:
        return ""
    return f"{author.last_name or ''}{author.first_name or ''}"


def sort_blogs(
    blogs: Sequence[BlogDB],
    spec: SortSpec | None,
    authors: Mapping[UUID, UserDB] | None = None,
    stats: Mapping[UUID, CommentStats] | None = None,
) -> list[BlogDB]:
    """
    Order blogs by one sort key.

    Args:
        blogs: Blogs in store order.
        spec: Sort field and direction; None keeps store order.
        authors: Loaded authors keyed by ID, needed for ``authorName``.
        stats: Comment stats keyed by blog ID, needed for aggregate fields.

    Returns:
        list[BlogDB]: A new sorted list.
    """
    if spec is None:
        return list(blogs)

    authors = authors or {}
    stats = stats or {}
    keys: dict[str, SortKey] = {
        "title": lambda blog: collation_key(blog.title),
        "createdAt": lambda blog: blog.created_at,
        "updatedAt": lambda blog: blog.updated_at,
        "authorName": lambda blog: collation_key(author_name(authors.get(blog.author_id))),
        "commentsCount": lambda blog: stats.get(blog.id, _NO_COMMENTS).count,
        "avgNote": lambda blog: stats.get(blog.id, _NO_COMMENTS).average_note,
    }
    return sorted(blogs, key=keys[spec.field], reverse=spec.descending)


def sort_users(
    users: Sequence[UserDB],
    spec: SortSpec | None,
    comment_counts: Mapping[UUID, int] | None = None,
) -> list[UserDB]:
    """
    Order users by one sort key.

    ``username`` compares code points; ``commentsCount`` uses `comment_counts`,
    where absent users count 0.
    """
    if spec is None:
        return list(users)

    counts = comment_counts or {}
    keys: dict[str, SortKey] = {
        "username": lambda user: user.username,
        "commentsCount": lambda user: counts.get(user.id, 0),
    }
    return sorted(users, key=keys[spec.field], reverse=spec.descending)
