"""
Predicate building for the list endpoints.

Each builder turns a typed list query into SQLAlchemy boolean clauses for
``select(...).where(*clauses)``. Builders are pure: cross-entity name
filters must already be resolved into identity sets by the caller.
"""

from collections.abc import Collection
from datetime import MAXYEAR, UTC, datetime
from uuid import UUID

from sqlalchemy import false
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import col

from app.models import BlogDB, UserDB
from app.schemas.query import BlogQuery, UserQuery
from app.utils.helpers import as_utc

type Clauses = list[ColumnElement[bool]]


def parse_date_bound(raw: str) -> datetime | None:
    """
    Parse an ISO-8601 date or datetime used as a creation-time bound.

    An offset that moves the instant outside the representable range is
    clamped to the first or last representable UTC instant.

    Args:
        raw: ``2024-05-01``, ``2024-05-01T10:00:00`` or with an offset / ``Z``.

    Returns:
        datetime | None: Aware UTC datetime, or None when `raw` is not a date.
    """
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    try:
        return as_utc(parsed)
    except OverflowError:
        edge = datetime.max if parsed.year == MAXYEAR else datetime.min
        return edge.replace(tzinfo=UTC)


def date_range_clauses(
    column: ColumnElement[datetime],
    start: str | None,
    end: str | None,
) -> Clauses:
    """
    Inclusive creation-time bounds; either side may be absent.

    A malformed bound yields a clause that matches nothing.
    """
    clauses: Clauses = []
    for raw, is_start in ((start, True), (end, False)):
        if raw is None:
            continue
        bound = parse_date_bound(raw)
        if bound is None:
            clauses.append(false())
        elif is_start:
            clauses.append(column >= bound)
        else:
            clauses.append(column <= bound)
    return clauses


def in_set(column: ColumnElement[UUID], ids: Collection[UUID]) -> ColumnElement[bool]:
    """Membership clause; an empty set matches nothing."""
    if not ids:
        return false()
    return column.in_(ids)


def build_blog_filters(
    query: BlogQuery,
    author_ids: Collection[UUID] | None = None,
    blog_ids: Collection[UUID] | None = None,
) -> Clauses:
    """
    Build the blog predicate.

    Args:
        query: Parsed ``GET /blogs`` query.
        author_ids: Resolved ``authorName`` matches, None when not filtered.
        blog_ids: Resolved ``commenterName`` matches, None when not filtered.

    Returns:
        Clauses: Clauses to AND together. Empty when nothing is filtered.
    """
    clauses: Clauses = []

    if query.title is not None:
        clauses.append(col(BlogDB.title).icontains(query.title, autoescape=True))

    clauses.extend(date_range_clauses(col(BlogDB.created_at), query.start_date, query.end_date))

    if query.author is not None:
        clauses.append(col(BlogDB.author_id) == query.author)
    if query.content is not None:
        clauses.append(col(BlogDB.content) == query.content)

    if author_ids is not None:
        clauses.append(in_set(col(BlogDB.author_id), author_ids))
    if blog_ids is not None:
        clauses.append(in_set(col(BlogDB.id), blog_ids))

    return clauses


def build_user_filters(query: UserQuery) -> Clauses:
    """Build the user predicate from exact-match fields."""
    clauses: Clauses = []
    if query.username is not None:
        clauses.append(col(UserDB.username) == query.username)
    if query.email is not None:
        clauses.append(col(UserDB.email) == query.email.lower())
    if query.first_name is not None:
        clauses.append(col(UserDB.first_name) == query.first_name)
    if query.last_name is not None:
        clauses.append(col(UserDB.last_name) == query.last_name)
    return clauses
