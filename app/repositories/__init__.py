"""Repository layer for database operations."""

from app.repositories.blog import BlogRepository
from app.repositories.comment import CommentRepository, CommentStats
from app.repositories.user import UserRepository

__all__ = [
    "BlogRepository",
    "CommentRepository",
    "CommentStats",
    "UserRepository",
]
