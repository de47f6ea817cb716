"""Blog database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.configs import TITLE_MAX_LENGTH
from app.utils.helpers import utc_now


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    This model represents the blogs table in the database. The author
    reference is checked by the application on write; deleting the author
    removes the blog through the cleanup service, not through the database.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (Index("ix_blogs_author_created", "author_id", "created_at"),)

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            Uuid,
            ForeignKey("users.id"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(TITLE_MAX_LENGTH), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "A week of slow travel",
                "content": "Slow travel means staying longer in fewer places...",
            },
        },
    )
