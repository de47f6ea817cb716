"""Comment database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.configs import COMMENT_MAX_LENGTH
from app.utils.helpers import utc_now


class CommentDB(SQLModel, table=True):
    """
    Comment database model.

    Comments are a collection of their own, referencing both the blog they
    belong to and the user who wrote them. Both references are checked by
    the application when the comment is created.
    """

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (
        Index("ix_comments_blog_user", "blog_id", "user_id"),
        Index("ix_comments_created_at", "created_at"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Comment ID",
    )

    # Foreign keys
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id"),
            nullable=False,
            index=True,
        ),
        description="Blog ID (foreign key to blogs.id)",
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            Uuid,
            ForeignKey("users.id"),
            nullable=False,
            index=True,
        ),
        description="Commenter ID (foreign key to users.id)",
    )

    # Comment content
    content: str = Field(
        sa_column=Column(String(COMMENT_MAX_LENGTH), nullable=False),
        description="Comment content",
    )
    note: int | None = Field(
        default=None,
        description="Optional rating from 1-5",
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "blog_id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174111",
                "content": "Loved the part about the night markets.",
                "note": 5,
            },
        },
    )
