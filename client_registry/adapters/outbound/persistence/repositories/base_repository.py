# client_registry/adapters/outbound/persistence/repositories/base_repository.py

from typing import Any, Generic, List, Optional, Type, TypeVar
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from client_registry.adapters.outbound.persistence.models.base_model import Base
from client_registry.domain.exceptions import DatabaseOperationException

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

# Configure logger
logger = logging.getLogger(__name__)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic queries and unit-of-work operations for any entity.
    Methods never commit: the caller owns the session and its single commit
    point. Store errors are wrapped in DatabaseOperationException.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get_by_field(
            self, db: AsyncSession, field_name: str, value: Any, *, for_update: bool = False
    ) -> Optional[ModelType]:
        """
        Get an entity by the value of a specific field.

        Args:
            db: Async database session
            field_name: Name of the field/column to filter
            value: Value to filter
            for_update: Lock the selected row until the transaction ends

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value)
            if for_update:
                query = query.with_for_update()
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with {field_name}={value}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__} by {field_name}",
                original_error=e
            )

    async def exists(self, db: AsyncSession, **filters) -> bool:
        """
        Check if an entity exists with the specified filters.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model)
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)

            result = await db.execute(select(query.exists()))
            return bool(result.scalar())
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking existence of {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error checking existence of {self.model.__name__}",
                original_error=e
            )

    async def get_multi(self, db: AsyncSession, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """
        Get one offset page of entities in primary key order.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).order_by(self.model.id).offset(skip).limit(limit)
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def count(self, db: AsyncSession) -> int:
        """
        Count every entity of the model.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            result = await db.execute(select(func.count()).select_from(self.model))
            return result.scalar_one()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error counting {self.model.__name__}s",
                original_error=e
            )

    async def add(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """
        Stage a new entity for insertion and flush it.

        IntegrityError is left to the caller, which decides whether it is a
        conflict.
        """
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def delete_where(self, db: AsyncSession, *criteria) -> int:
        """
        Delete every entity matching ``criteria`` with one DELETE statement.

        Returns:
            Number of rows deleted

        Raises:
            DatabaseOperationException: If an error occurs in the statement
        """
        try:
            stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
            result = await db.execute(stmt)
            return result.rowcount or 0
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error deleting {self.model.__name__}",
                original_error=e
            )
