# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    BlogIdDep,
    BlogQueryDep,
    BlogRepoDep,
    CleanupDep,
    CommentRepoDep,
    QueryComposerDep,
    SessionDep,
    UserIdDep,
    UserQueryDep,
    UserRepoDep,
    get_blog_query,
    get_user_query,
    parse_id,
)

__all__ = [
    "BlogIdDep",
    "BlogQueryDep",
    "BlogRepoDep",
    "CleanupDep",
    "CommentRepoDep",
    "QueryComposerDep",
    "SessionDep",
    "UserIdDep",
    "UserQueryDep",
    "UserRepoDep",
    "get_blog_query",
    "get_user_query",
    "parse_id",
]
