"""User repository for database operations."""

from logging import getLogger
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import col

from app.configs import file_logger
from app.errors.database import DuplicateEntryError
from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.schemas.user import UserCreate, UserUpdate

logger = file_logger(getLogger(__name__))


def name_matches(name: str) -> ColumnElement[bool]:
    """
    Case-insensitive substring match on first name, last name or username.

    Args:
        name: Text to look for; LIKE wildcards in it are matched literally.

    Returns:
        ColumnElement[bool]: OR of the three substring matches.
    """
    return or_(
        col(UserDB.first_name).icontains(name, autoescape=True),
        col(UserDB.last_name).icontains(name, autoescape=True),
        col(UserDB.username).icontains(name, autoescape=True),
    )


class UserRepository(BaseRepository[UserDB, UserCreate, UserUpdate]):
    """
    Repository for User database operations.

    This class implements the repository pattern for User entities,
    providing CRUD operations and the lookups used by the query services.
    """

    model = UserDB

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session."""
        super().__init__(session)

    async def create(self, schema: UserCreate, **kwargs: object) -> UserDB:
        """
        Create a new user in the database.

        Args:
            schema: User schema with user data

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If username or email already exists
            DatabaseError: For other database errors
        """
        await self._ensure_unique(schema.username, schema.email)
        return await super().create(schema, **kwargs)

    async def update(self, record_id: UUID, schema: UserUpdate) -> UserDB | None:
        """
        Update user information.

        Args:
            record_id: User UUID
            schema: User update schema with fields to update

        Returns:
            UserDB | None: Updated user if found, None otherwise

        Raises:
            DuplicateEntryError: If username or email belongs to another user
        """
        if not await self.exists(record_id):
            return None
        await self._ensure_unique(schema.username, schema.email, exclude_id=record_id)
        return await super().update(record_id, schema)

    async def ids_matching_name(self, name: str) -> set[UUID]:
        """
        Get the IDs of users whose first name, last name or username contains `name`.

        Args:
            name: Case-insensitive substring

        Returns:
            set[UUID]: Matching user IDs, empty when nobody matches
        """
        result = await self.session.execute(select(col(UserDB.id)).where(name_matches(name)))
        ids = set(result.scalars().all())
        logger.debug(f"Name '{name}' matched {len(ids)} user(s)")
        return ids

    async def _ensure_unique(
        self,
        username: str | None,
        email: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        if username is not None and await self._check_exists_by_field(
            "username",
            username,
            exclude_id,
        ):
            raise DuplicateEntryError
        if email is not None and await self._check_exists_by_field("email", email, exclude_id):
            raise DuplicateEntryError
