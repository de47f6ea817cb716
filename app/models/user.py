"""User database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs import NAME_MAX_LENGTH, USERNAME_MAX_LENGTH
from app.utils.helpers import utc_now


class UserDB(SQLModel, table=True):
    """
    User database model.

    This model represents the users table in the database. Username and
    email are unique across all users.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    # Required fields
    username: str = Field(
        sa_column=Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False, index=True),
        description="Username (unique)",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, lower-cased)",
    )

    # Optional profile fields
    first_name: str | None = Field(
        default=None,
        sa_column=Column(String(NAME_MAX_LENGTH)),
        description="User first name",
    )
    last_name: str | None = Field(
        default=None,
        sa_column=Column(String(NAME_MAX_LENGTH)),
        description="User last name",
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
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "johndoe",
                "email": "johndoe@gmail.com",
                "first_name": "John",
                "last_name": "Doe",
            },
        },
    )
