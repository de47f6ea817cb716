"""
Blog schemas for the Blog API.

This module defines the models used for representing blog posts in
requests and responses. Responses replace the author reference with the
author's public fields.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs import CONTENT_MIN_LENGTH, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from app.schemas.comment import CommentResponse
from app.schemas.user import AuthorResponse
from app.utils.helpers import as_utc


class BlogCreate(BaseModel):
    """Blog creation model (for request body - excludes auto-generated fields)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Blog title",
        examples=["A week of slow travel"],
    )
    author_id: UUID = Field(
        alias="author",
        description="Author ID (for foreign key relationship)",
    )
    content: str = Field(
        ...,
        min_length=CONTENT_MIN_LENGTH,
        description="Blog content",
        examples=["Slow travel means staying longer in fewer places."],
    )


class BlogUpdate(BaseModel):
    """Blog update model (all fields optional)."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Two weeks of slow travel",
                "content": "Slow travel, it turns out, is even better in a fortnight.",
            },
        },
    )

    title: str | None = Field(
        default=None,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
    )
    author_id: UUID | None = Field(default=None, alias="author")
    content: str | None = Field(default=None, min_length=CONTENT_MIN_LENGTH)


class BlogResponse(BaseModel):
    """Blog response model with the author populated."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    author: AuthorResponse | None = None
    content: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class BlogDetailResponse(BlogResponse):
    """Single blog response including its comments."""

    comments: list[CommentResponse] = Field(default_factory=list)


class BlogDeleteResponse(BaseModel):
    """Confirmation returned after a blog and its comments are removed."""

    message: str
    blog: BlogResponse
