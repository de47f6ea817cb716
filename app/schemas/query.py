"""
Typed query-string configuration for the list endpoints.

Every recognised key is declared here; anything else in the query string
is rejected rather than passed to the store.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

BLOG_SORT_FIELDS = frozenset(
    {"title", "createdAt", "updatedAt", "authorName", "commentsCount", "avgNote"},
)
USER_SORT_FIELDS = frozenset({"username", "commentsCount"})


class SortSpec(BaseModel):
    """A single sort key parsed from ``field_direction``."""

    model_config = ConfigDict(frozen=True)

    field: str
    descending: bool = False

    @classmethod
    def parse(cls, raw: str) -> "SortSpec":
        """
        Parse ``field_direction`` into a sort spec.

        The field is the text before the first ``_`` and the direction the
        text after it, up to any further ``_``. Only ``desc`` sorts
        descending; a missing or any other direction sorts ascending.

        Args:
            raw: Raw ``sort`` query value, e.g. ``avgNote_desc``.

        Returns:
            SortSpec: Parsed field and direction.
        """
        field, *rest = raw.strip().split("_")
        return cls(field=field, descending=rest[:1] == ["desc"])

    def __str__(self) -> str:
        return f"{self.field}_{'desc' if self.descending else 'asc'}"


def _parse_sort(value: Any, allowed: frozenset[str]) -> SortSpec | None:
    if value is None or isinstance(value, SortSpec):
        return value
    spec = SortSpec.parse(str(value))
    if spec.field not in allowed:
        mssg = f"Unsupported sort field '{spec.field}'. Expected one of {sorted(allowed)}"
        raise ValueError(mssg)
    return spec


class ListQuery(BaseModel):
    """Shared behaviour of list query models."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_empty_values(cls, data: Any) -> Any:
        """Treat empty query values as absent."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value not in ("", None)}
        return data


class BlogQuery(ListQuery):
    """
    Recognised query parameters of ``GET /blogs``.

    Attributes:
        title: Case-insensitive substring of the title.
        author_name: Matched against author first name, last name or username.
        commenter_name: Matched against commenter first name, last name or username.
        start_date: Inclusive lower bound on creation time (raw string).
        end_date: Inclusive upper bound on creation time (raw string).
        sort: Sort key over the materialized result.
        author: Exact author ID.
        content: Exact content.
    """

    title: str | None = None
    author_name: str | None = Field(default=None, alias="authorName")
    commenter_name: str | None = Field(default=None, alias="commenterName")
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    sort: SortSpec | None = None
    author: UUID | None = None
    content: str | None = None

    @field_validator("sort", mode="before")
    @classmethod
    def validate_sort(cls, v: Any) -> SortSpec | None:
        return _parse_sort(v, BLOG_SORT_FIELDS)


class UserQuery(ListQuery):
    """Recognised query parameters of ``GET /users``."""

    username: str | None = None
    email: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    sort: SortSpec | None = None

    @field_validator("sort", mode="before")
    @classmethod
    def validate_sort(cls, v: Any) -> SortSpec | None:
        return _parse_sort(v, USER_SORT_FIELDS)
