"""Base repository for database operations."""

from collections.abc import Iterable
from datetime import datetime
from itertools import batched
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from app.utils.helpers import utc_now

type FilterValue = str | int | float | bool | UUID | datetime | None


class BaseRepository[ModelT: SQLModel, CreateSchemaT: BaseModel, UpdateSchemaT: BaseModel]:
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories. Listing methods
    return rows in store order, which is creation order.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        in_batch_size: Most IDs bound in one IN list; longer ID sets are
            split over several statements.
    """

    model: type[ModelT]
    id_field: str = "id"
    # IDs bound per IN list; asyncpg allows at most 32767 parameters a statement
    in_batch_size: int = 5000

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    @property
    def _order_column(self) -> Any:
        return getattr(self.model, "created_at")

    async def create(self, schema: CreateSchemaT, **kwargs: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            schema: Creation schema with data
            **kwargs: Extra column values not carried by the schema

        Returns:
            ModelT: Created database model
        """
        data = schema.model_dump(exclude_unset=True)
        data.update(kwargs)
        now = utc_now()
        data.setdefault("created_at", now)
        data.setdefault("updated_at", now)
        db_obj = self.model.model_validate(data)
        return await self._add_and_refresh(db_obj)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record UUID

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(detail=f"{self.entity_name} not found")
        return record

    async def get_many(self, record_ids: Iterable[UUID]) -> dict[UUID, ModelT]:
        """
        Batch-load records by ID.

        Args:
            record_ids: IDs to load; duplicates are ignored

        Returns:
            dict[UUID, ModelT]: Loaded records keyed by ID. Unknown IDs are absent.
        """
        records: dict[UUID, ModelT] = {}
        for batch in self._batches(record_ids):
            statement = select(self.model).where(self._id_column.in_(batch))
            result = await self.session.execute(statement)
            records.update((getattr(row, self.id_field), row) for row in result.scalars().all())
        return records

    async def find(self, clauses: Iterable[ColumnElement[bool]] = ()) -> list[ModelT]:
        """
        Get every record matching all clauses, in store order.

        Args:
            clauses: Boolean SQL expressions combined with AND

        Returns:
            list[ModelT]: Matching records
        """
        statement = select(self.model).where(*clauses).order_by(self._order_column)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(
        self,
        record_id: UUID,
        schema: UpdateSchemaT,
    ) -> ModelT | None:
        """
        Update a record.

        Args:
            record_id: Record UUID
            schema: Update schema with fields to update

        Returns:
            ModelT | None: Updated record if found, None otherwise
        """
        db_obj = await self.get_by_id(record_id)
        if not db_obj:
            return None

        obj_data = schema.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in obj_data.items():
            setattr(db_obj, key, value)
        setattr(db_obj, "updated_at", utc_now())

        return await self._add_and_refresh(db_obj)

    async def delete(self, record_id: UUID) -> bool:
        """
        Delete a record by ID.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            return False

        await self.session.delete(record)
        await self.session.flush()
        return True

    async def delete_where(self, *clauses: ColumnElement[bool]) -> int:
        """
        Delete every record matching all clauses.

        Returns:
            int: Number of deleted records
        """
        statement = delete(self.model).where(*clauses)
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount or 0

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record exists, False otherwise
        """
        # Existence check without loading the full object
        statement = select(1).where(self._id_column == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    def _batches(self, ids: Iterable[UUID]) -> list[tuple[UUID, ...]]:
        """Split distinct IDs into chunks of at most `in_batch_size`."""
        return list(batched(set(ids), self.in_batch_size))

    @property
    def entity_name(self) -> str:
        return self.model.__name__.removesuffix("DB")

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except Exception as e:
            await self.session.rollback()
            raise DatabaseConnectionError(
                detail=f"Failed to save record: {e}",
            ) from e

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            statement = statement.where(self._id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
