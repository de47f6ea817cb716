# app/routes/user.py

"""
User Routes.

Provides CRUD endpoints for users and the reverse listings of what a user
wrote.

Summary
-------
Endpoints include:
  - List users (exact-match filters, sorting)
  - Create user
  - Get user by id
  - Update user
  - Delete user (with their blogs and comments)
  - List a user's comments
  - List a user's blogs

Errors
------
Username and email are unique; a conflict is reported as `400` with a
dedicated message.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import DUPLICATE_USER_MESSAGE, INVALID_ID_MESSAGE, file_logger
from app.dependencies import (
    BlogRepoDep,
    CleanupDep,
    CommentRepoDep,
    QueryComposerDep,
    UserIdDep,
    UserQueryDep,
    UserRepoDep,
)
from app.errors import RecordNotFoundError
from app.models import UserDB
from app.routes.blog import comments_to_response, db_blog_to_response
from app.schemas import (
    BlogResponse,
    CommentResponse,
    UserCreate,
    UserDeleteResponse,
    UserResponse,
    UserUpdate,
)
from app.utils import error_example

router = APIRouter(prefix="/users", tags=["👤 Users"])

logger = file_logger(getLogger(__name__))

USER_NOT_FOUND = "User not found"

_USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "username": "johndoe",
    "email": "johndoe@gmail.com",
    "firstName": "John",
    "lastName": "Doe",
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:00:00Z",
}


def db_user_to_response(db_user: UserDB) -> UserResponse:
    """
    Convert a `UserDB` instance to `UserResponse`.

    Parameters
    ----------
    db_user : UserDB
        Database user entity.

    Returns
    -------
    UserResponse
        Validated response model.
    """
    return UserResponse.model_validate(db_user, from_attributes=True)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[UserResponse],
    summary="List users",
    description=(
        "List users with optional exact-match filters `username`, `email`, "
        "`firstName`, `lastName` and `sort` (`username` or `commentsCount`)."
    ),
    responses={
        200: {"content": {"application/json": {"example": [_USER_EXAMPLE]}}},
        400: error_example("Bad request", "nickname: Extra inputs are not permitted"),
    },
    operation_id="users_list",
)
async def list_users(
    query: UserQueryDep,
    composer: QueryComposerDep,
) -> list[UserResponse]:
    """
    List users matching the query.

    Parameters
    ----------
    query : UserQuery
        Parsed filters and sort.
    composer : QueryComposer
        List query composer.

    Returns
    -------
    list[UserResponse]
        Matching users.
    """
    users = await composer.list_users(query)
    return [db_user_to_response(user) for user in users]


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new user",
    description="Create a new user. Username and email must be unique.",
    responses={
        201: {"content": {"application/json": {"example": _USER_EXAMPLE}}},
        400: error_example("Bad request", DUPLICATE_USER_MESSAGE),
    },
    operation_id="users_create",
)
async def create_user(
    user: Annotated[
        UserCreate,
        Body(
            examples=[
                {
                    "username": "johndoe",
                    "email": "johndoe@gmail.com",
                    "firstName": "John",
                    "lastName": "Doe",
                },
            ],
        ),
    ],
    user_repo: UserRepoDep,
) -> UserResponse:
    """
    Create a new user.

    Parameters
    ----------
    user : UserCreate
        User input payload.
    user_repo : UserRepository
        Repository dependency.

    Returns
    -------
    UserResponse
        Created user data.

    Raises
    ------
    DuplicateEntryError
        If username or email already exists.
    """
    db_user = await user_repo.create(user)
    logger.info(f"User {db_user.username} created")
    return db_user_to_response(db_user)


@router.get(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get user by ID",
    responses={
        200: {"content": {"application/json": {"example": _USER_EXAMPLE}}},
        400: error_example("Invalid ID", INVALID_ID_MESSAGE),
        404: error_example("Not found", USER_NOT_FOUND),
    },
    operation_id="users_get_by_id",
)
async def get_user(user_id: UserIdDep, user_repo: UserRepoDep) -> UserResponse:
    return db_user_to_response(await user_repo.get_or_raise(user_id))


@router.put(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Update user",
    description="Partially update a user. Username and email must stay unique.",
    responses={
        200: {"content": {"application/json": {"example": _USER_EXAMPLE}}},
        400: error_example("Bad request", DUPLICATE_USER_MESSAGE),
        404: error_example("Not found", USER_NOT_FOUND),
    },
    operation_id="users_update",
)
async def update_user(
    user_id: UserIdDep,
    user_update: UserUpdate,
    user_repo: UserRepoDep,
) -> UserResponse:
    """
    Update user information.

    Parameters
    ----------
    user_id : UUID
        User identifier.
    user_update : UserUpdate
        Fields to update.

    Returns
    -------
    UserResponse
        Updated user data.

    Raises
    ------
    RecordNotFoundError
        If the user does not exist.
    DuplicateEntryError
        If the new username or email belongs to another user.
    """
    db_user = await user_repo.update(user_id, user_update)
    if not db_user:
        raise RecordNotFoundError(USER_NOT_FOUND)
    return db_user_to_response(db_user)


@router.delete(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserDeleteResponse,
    summary="Delete user",
    description="Delete a user, the blogs they wrote with their comments, and their comments.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "User deleted successfully", "user": _USER_EXAMPLE},
                },
            },
        },
        400: error_example("Invalid ID", INVALID_ID_MESSAGE),
        404: error_example("Not found", USER_NOT_FOUND),
    },
    operation_id="users_delete",
)
async def delete_user(
    user_id: UserIdDep,
    user_repo: UserRepoDep,
    cleanup: CleanupDep,
) -> UserDeleteResponse:
    """
    Delete a user and everything that depends on them.

    Parameters
    ----------
    user_id : UUID
        User identifier.

    Returns
    -------
    UserDeleteResponse
        Confirmation with the deleted user.
    """
    db_user = await user_repo.get_or_raise(user_id)
    deleted = db_user_to_response(db_user)
    await cleanup.delete_user(db_user)
    return UserDeleteResponse(message="User deleted successfully", user=deleted)


@router.get(
    "/{user_id}/comments",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List comments written by a user",
    responses={
        400: error_example("Invalid ID", INVALID_ID_MESSAGE),
        404: error_example("Not found", USER_NOT_FOUND),
    },
    operation_id="users_comments_list",
)
async def list_user_comments(
    user_id: UserIdDep,
    user_repo: UserRepoDep,
    comment_repo: CommentRepoDep,
) -> list[CommentResponse]:
    await user_repo.get_or_raise(user_id)
    return await comments_to_response(await comment_repo.get_by_user(user_id), user_repo)


@router.get(
    "/{user_id}/blogs",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List blogs written by a user",
    responses={
        400: error_example("Invalid ID", INVALID_ID_MESSAGE),
        404: error_example("Not found", USER_NOT_FOUND),
    },
    operation_id="users_blogs_list",
)
async def list_user_blogs(
    user_id: UserIdDep,
    user_repo: UserRepoDep,
    blog_repo: BlogRepoDep,
) -> list[BlogResponse]:
    author = await user_repo.get_or_raise(user_id)
    return [db_blog_to_response(blog, author) for blog in await blog_repo.get_by_author(user_id)]
