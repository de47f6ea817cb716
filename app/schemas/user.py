"""
User schemas for the Blog API.

This module defines the request and response models used for users,
together with the reduced user views embedded in blogs and comments.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.configs import NAME_MAX_LENGTH, USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from app.utils.helpers import as_utc


class UserCreate(BaseModel):
    """User creation model (for request body - excludes auto-generated fields)."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Username",
        examples=["johndoe"],
    )
    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["johndoe@gmail.com"],
    )
    first_name: str | None = Field(
        alias="firstName",
        default=None,
        max_length=NAME_MAX_LENGTH,
        description="User first name",
    )
    last_name: str | None = Field(
        alias="lastName",
        default=None,
        max_length=NAME_MAX_LENGTH,
        description="User last name",
    )

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str) -> str:
        """Store emails lower-cased so uniqueness is case-insensitive."""
        return v.lower()


class UserUpdate(BaseModel):
    """User update model (all fields optional)."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    username: str | None = Field(
        default=None,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Username",
    )
    email: EmailStr | None = Field(
        default=None,
        description="Email address",
    )
    first_name: str | None = Field(
        alias="firstName",
        default=None,
        max_length=NAME_MAX_LENGTH,
        description="User first name",
    )
    last_name: str | None = Field(
        alias="lastName",
        default=None,
        max_length=NAME_MAX_LENGTH,
        description="User last name",
    )

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v


class UserResponse(BaseModel):
    """User response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    email: EmailStr
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class UserDeleteResponse(BaseModel):
    """Confirmation returned after a user and its dependents are removed."""

    message: str
    user: UserResponse


class AuthorResponse(BaseModel):
    """Author information embedded in blog responses."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    email: EmailStr
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class CommenterResponse(BaseModel):
    """Commenter information embedded in comment responses."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
