# app/dependencies/dependencies.py

"""Request-scoped dependencies: repositories, services, ids and list queries."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.errors import InvalidIdError
from app.repositories import BlogRepository, CommentRepository, UserRepository
from app.schemas.query import BlogQuery, ListQuery, UserQuery
from app.services import QueryComposer, ReferentialCleanup

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]


def get_query_composer(
    user_repo: UserRepoDep,
    blog_repo: BlogRepoDep,
    comment_repo: CommentRepoDep,
) -> QueryComposer:
    """Dependency to get the list query composer bound to the request session."""
    return QueryComposer(user_repo, blog_repo, comment_repo)


def get_cleanup(
    user_repo: UserRepoDep,
    blog_repo: BlogRepoDep,
    comment_repo: CommentRepoDep,
) -> ReferentialCleanup:
    """Dependency to get the cascade-delete service bound to the request session."""
    return ReferentialCleanup(user_repo, blog_repo, comment_repo)


QueryComposerDep = Annotated[QueryComposer, Depends(get_query_composer)]
CleanupDep = Annotated[ReferentialCleanup, Depends(get_cleanup)]


def parse_id(raw: str) -> UUID:
    """
    Parse a path identifier.

    Raises
    ------
    InvalidIdError
        If `raw` is not a well-formed UUID.
    """
    try:
        return UUID(raw)
    except ValueError as e:
        raise InvalidIdError from e


def get_blog_id(blog_id: Annotated[str, Path(description="Blog ID")]) -> UUID:
    return parse_id(blog_id)


def get_user_id(user_id: Annotated[str, Path(description="User ID")]) -> UUID:
    return parse_id(user_id)


BlogIdDep = Annotated[UUID, Depends(get_blog_id)]
UserIdDep = Annotated[UUID, Depends(get_user_id)]


def _parse_query[QueryT: ListQuery](model: type[QueryT], request: Request) -> QueryT:
    try:
        return model.model_validate(dict(request.query_params))
    except PydanticValidationError as e:
        errors = [{**error, "loc": ("query", *error["loc"])} for error in e.errors()]
        raise RequestValidationError(errors) from e


def get_blog_query(request: Request) -> BlogQuery:
    """
    Dependency to construct `BlogQuery` from the raw query string.

    Unrecognised keys and unsupported sort fields are rejected with 400.

    Returns
    -------
    BlogQuery
        Parsed filter and sort parameters.
    """
    return _parse_query(BlogQuery, request)


def get_user_query(request: Request) -> UserQuery:
    """
    Dependency to construct `UserQuery` from the raw query string.

    Returns
    -------
    UserQuery
        Parsed filter and sort parameters.
    """
    return _parse_query(UserQuery, request)


BlogQueryDep = Annotated[BlogQuery, Depends(get_blog_query)]
UserQueryDep = Annotated[UserQuery, Depends(get_user_query)]
