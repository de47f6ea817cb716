# app/routes/blog.py

"""
Blog Routes.

Provides CRUD endpoints, filtered listing and comments for blogs.

Summary
-------
Endpoints include:
  - List blogs (filters, cross-entity name filters, sorting)
  - Create blog
  - Get blog by id (with comments)
  - Update blog
  - Delete blog (with its comments)
  - List comments of a blog
  - Add a comment to a blog

Dependencies
------------
  - `QueryComposerDep`: Resolves, filters and sorts list queries.
  - `CleanupDep`: Removes a blog together with its comments.

Errors
------
Every failure is rendered as ``{"error": <message>}``. Malformed ids give
`400`, unknown ids `404`, unknown authors or commenters `400`.
"""

from collections.abc import Iterable, Mapping
from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import (
    BlogIdDep,
    BlogQueryDep,
    BlogRepoDep,
    CleanupDep,
    CommentRepoDep,
    QueryComposerDep,
    UserRepoDep,
)
from app.errors import MissingReferenceError, RecordNotFoundError
from app.models import BlogDB, CommentDB, UserDB
from app.repositories import UserRepository
from app.schemas import (
    AuthorResponse,
    BlogCreate,
    BlogDeleteResponse,
    BlogDetailResponse,
    BlogResponse,
    BlogUpdate,
    CommentCreate,
    CommenterResponse,
    CommentResponse,
)
from app.utils import error_example

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

BLOG_NOT_FOUND = "Blog not found"
AUTHOR_NOT_FOUND = "Author not found"
USER_NOT_FOUND = "User not found"

_BLOG_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "A week of slow travel",
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "username": "johndoe",
        "email": "johndoe@gmail.com",
        "firstName": "John",
        "lastName": "Doe",
    },
    "content": "Slow travel means staying longer in fewer places.",
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:00:00Z",
}

_COMMENT_EXAMPLE = {
    "id": "9b2f6c1e-6a3e-4c1b-9a43-5d3c6f1b2a10",
    "blog": "550e8400-e29b-41d4-a716-446655440000",
    "user": {
        "id": "123e4567-e89b-12d3-a456-426614174111",
        "username": "janedoe",
        "firstName": "Jane",
        "lastName": "Doe",
    },
    "content": "Loved the part about the night markets.",
    "note": 5,
    "createdAt": "2025-01-02T08:30:00Z",
    "updatedAt": "2025-01-02T08:30:00Z",
}


def db_blog_to_response(db_blog: BlogDB, author: UserDB | None) -> BlogResponse:
    """
    Convert a `BlogDB` instance to `BlogResponse` with the author populated.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity.
    author : UserDB | None
        The blog's author, None when it no longer resolves.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    return BlogResponse(
        id=db_blog.id,
        title=db_blog.title,
        author=AuthorResponse.model_validate(author) if author else None,
        content=db_blog.content,
        created_at=db_blog.created_at,
        updated_at=db_blog.updated_at,
    )


def db_comment_to_response(db_comment: CommentDB, user: UserDB | None) -> CommentResponse:
    """
    Convert a `CommentDB` instance to `CommentResponse` with the commenter populated.

    Parameters
    ----------
    db_comment : CommentDB
        Database comment entity.
    user : UserDB | None
        The commenter, None when it no longer resolves.

    Returns
    -------
    CommentResponse
        Validated response model.
    """
    return CommentResponse(
        id=db_comment.id,
        blog_id=db_comment.blog_id,
        user=CommenterResponse.model_validate(user) if user else None,
        content=db_comment.content,
        note=db_comment.note,
        created_at=db_comment.created_at,
        updated_at=db_comment.updated_at,
    )


def blogs_to_response(
    blogs: Iterable[BlogDB],
    authors: Mapping[UUID, UserDB],
) -> list[BlogResponse]:
    return [db_blog_to_response(blog, authors.get(blog.author_id)) for blog in blogs]


async def comments_to_response(
    comments: list[CommentDB],
    user_repo: UserRepository,
) -> list[CommentResponse]:
    """Populate commenters with one batch lookup and convert."""
    users = await user_repo.get_many(comment.user_id for comment in comments)
    return [db_comment_to_response(comment, users.get(comment.user_id)) for comment in comments]


async def _require_author(user_repo: UserRepository, author_id: UUID) -> UserDB:
    author = await user_repo.get_by_id(author_id)
    if not author:
        raise MissingReferenceError(AUTHOR_NOT_FOUND)
    return author


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List blogs",
    description=(
        "List blogs with optional filters: `title` (substring), `authorName`, "
        "`commenterName`, `startDate`/`endDate` (inclusive creation bounds), "
        "`author`, `content`, and `sort` as `field_direction`."
    ),
    responses={
        200: {"content": {"application/json": {"example": [_BLOG_EXAMPLE]}}},
        400: error_example(
            "Bad request",
            "sort: Value error, Unsupported sort field 'views'",
        ),
        500: error_example("Store error", "connection refused"),
    },
    operation_id="blogs_list",
)
async def list_blogs(
    query: BlogQueryDep,
    composer: QueryComposerDep,
) -> list[BlogResponse]:
    """
    List blogs matching the query.

    Parameters
    ----------
    query : BlogQuery
        Parsed filters and sort.
    composer : QueryComposer
        List query composer.

    Returns
    -------
    list[BlogResponse]
        Matching blogs with authors populated.
    """
    blogs, authors = await composer.list_blogs(query)
    return blogs_to_response(blogs, authors)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a new blog post for an existing author.",
    responses={
        201: {"content": {"application/json": {"example": _BLOG_EXAMPLE}}},
        400: error_example("Bad request", AUTHOR_NOT_FOUND),
    },
    operation_id="blogs_create",
)
async def create_blog(
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "A week of slow travel",
                    "author": "123e4567-e89b-12d3-a456-426614174000",
                    "content": "Slow travel means staying longer in fewer places.",
                },
            ],
        ),
    ],
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
) -> BlogResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    blog : BlogCreate
        Blog input payload.
    blog_repo : BlogRepository
        Blog repository dependency.
    user_repo : UserRepository
        User repository dependency.

    Returns
    -------
    BlogResponse
        Created blog with its author.

    Raises
    ------
    MissingReferenceError
        If the author does not exist.
    """
    author = await _require_author(user_repo, blog.author_id)
    db_blog = await blog_repo.create(blog)
    logger.info(f"Blog {db_blog.id} created by {author.username}")
    return db_blog_to_response(db_blog, author)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Get blog by ID",
    description="Retrieve a blog post with its author and comments.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {**_BLOG_EXAMPLE, "comments": [_COMMENT_EXAMPLE]},
                },
            },
        },
        400: error_example("Invalid ID", "Invalid ID format"),
        404: error_example("Not found", BLOG_NOT_FOUND),
    },
    operation_id="blogs_get_by_id",
)
async def get_blog(
    blog_id: BlogIdDep,
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
    comment_repo: CommentRepoDep,
) -> BlogDetailResponse:
    """
    Get a blog by ID with its comments.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.

    Returns
    -------
    BlogDetailResponse
        Blog data with author and commenters populated.
    """
    db_blog = await blog_repo.get_or_raise(blog_id)
    author = await user_repo.get_by_id(db_blog.author_id)
    comments = await comments_to_response(await comment_repo.get_by_blog(blog_id), user_repo)
    base = db_blog_to_response(db_blog, author)
    return BlogDetailResponse(**dict(base), comments=comments)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update blog",
    description="Partially update a blog post. A new author must exist.",
    responses={
        200: {"content": {"application/json": {"example": _BLOG_EXAMPLE}}},
        400: error_example("Bad request", AUTHOR_NOT_FOUND),
        404: error_example("Not found", BLOG_NOT_FOUND),
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: BlogIdDep,
    blog_update: BlogUpdate,
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
) -> BlogResponse:
    """
    Update blog information.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    blog_update : BlogUpdate
        Fields to update.

    Returns
    -------
    BlogResponse
        Updated blog.

    Raises
    ------
    RecordNotFoundError
        If the blog does not exist.
    MissingReferenceError
        If a new author is given and does not exist.
    """
    await blog_repo.get_or_raise(blog_id)
    if blog_update.author_id is not None:
        await _require_author(user_repo, blog_update.author_id)

    db_blog = await blog_repo.update(blog_id, blog_update)
    if not db_blog:
        raise RecordNotFoundError(BLOG_NOT_FOUND)
    author = await user_repo.get_by_id(db_blog.author_id)
    return db_blog_to_response(db_blog, author)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogDeleteResponse,
    summary="Delete blog",
    description="Delete a blog post and every comment on it.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Blog deleted successfully", "blog": _BLOG_EXAMPLE},
                },
            },
        },
        400: error_example("Invalid ID", "Invalid ID format"),
        404: error_example("Not found", BLOG_NOT_FOUND),
    },
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: BlogIdDep,
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
    cleanup: CleanupDep,
) -> BlogDeleteResponse:
    """
    Delete a blog and its comments.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.

    Returns
    -------
    BlogDeleteResponse
        Confirmation with the deleted blog.
    """
    db_blog = await blog_repo.get_or_raise(blog_id)
    deleted = db_blog_to_response(db_blog, await user_repo.get_by_id(db_blog.author_id))
    await cleanup.delete_blog(db_blog)
    return BlogDeleteResponse(message="Blog deleted successfully", blog=deleted)


@router.get(
    "/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List comments of a blog",
    responses={
        200: {"content": {"application/json": {"example": [_COMMENT_EXAMPLE]}}},
        404: error_example("Not found", BLOG_NOT_FOUND),
    },
    operation_id="blogs_comments_list",
)
async def list_blog_comments(
    blog_id: BlogIdDep,
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
    comment_repo: CommentRepoDep,
) -> list[CommentResponse]:
    await blog_repo.get_or_raise(blog_id)
    return await comments_to_response(await comment_repo.get_by_blog(blog_id), user_repo)


@router.post(
    "/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Add a comment to a blog",
    description="Add a comment by an existing user, with an optional note from 1 to 5.",
    responses={
        201: {"content": {"application/json": {"example": _COMMENT_EXAMPLE}}},
        400: error_example("Bad request", "note: Value error, Note must be between 1 and 5"),
        404: error_example("Not found", BLOG_NOT_FOUND),
    },
    operation_id="blogs_comments_create",
)
async def add_comment(
    blog_id: BlogIdDep,
    comment: Annotated[
        CommentCreate,
        Body(
            examples=[
                {
                    "user": "123e4567-e89b-12d3-a456-426614174111",
                    "content": "Loved the part about the night markets.",
                    "note": 5,
                },
            ],
        ),
    ],
    blog_repo: BlogRepoDep,
    user_repo: UserRepoDep,
    comment_repo: CommentRepoDep,
) -> CommentResponse:
    """
    Add a comment to a blog.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    comment : CommentCreate
        Comment payload.

    Returns
    -------
    CommentResponse
        Created comment with its commenter.

    Raises
    ------
    RecordNotFoundError
        If the blog does not exist.
    MissingReferenceError
        If the commenting user does not exist.
    """
    await blog_repo.get_or_raise(blog_id)
    user = await user_repo.get_by_id(comment.user_id)
    if not user:
        raise MissingReferenceError(USER_NOT_FOUND)

    db_comment = await comment_repo.create(comment, blog_id=blog_id)
    return db_comment_to_response(db_comment, user)
