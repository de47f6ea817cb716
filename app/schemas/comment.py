"""
Comment schemas for the Blog API.

Comments are their own collection; responses embed the commenter.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs import COMMENT_MAX_LENGTH, NOTE_MAX, NOTE_MIN
from app.schemas.user import CommenterResponse
from app.utils.helpers import as_utc


class CommentCreate(BaseModel):
    """Comment creation model (for request body)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    user_id: UUID = Field(
        alias="user",
        description="ID of the commenting user",
    )
    content: str = Field(
        min_length=1,
        max_length=COMMENT_MAX_LENGTH,
        description="Comment content",
        examples=["Loved the part about the night markets."],
    )
    note: int | None = Field(
        default=None,
        description="Optional rating from 1-5",
    )

    @field_validator("note")
    @classmethod
    def validate_note(cls, v: int | None) -> int | None:
        """Validate note is between 1 and 5."""
        if v is not None and not NOTE_MIN <= v <= NOTE_MAX:
            msg = "Note must be between 1 and 5"
            raise ValueError(msg)
        return v


class CommentResponse(BaseModel):
    """Comment response model with the commenter populated."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    blog_id: UUID = Field(alias="blog")
    user: CommenterResponse | None = None
    content: str
    note: int | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
