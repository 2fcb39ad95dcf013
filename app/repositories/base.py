"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel

from app.db.session import SessionManager

# Type variable for model types
T = TypeVar("T", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


class BaseRepository(Generic[T, CreateSchemaType]):
    """
    Base repository implementing insert-and-read operations for SQLModel entities.

    Each operation runs in its own session obtained from the session manager,
    so a write is committed (or rolled back) before the call returns.

    Type parameters:
        T: The SQLModel type this repository manages
        CreateSchemaType: The Pydantic model type for creation operations
    """

    def __init__(self, model_type: Type[T], sessions: SessionManager):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
            sessions: Session manager providing database sessions
        """
        self.model_type = model_type
        self.sessions = sessions

    async def create(
        self,
        data: Union[CreateSchemaType, Dict[str, Any]],
        unique_field: str = "id",
    ) -> T:
        """
        Insert a new entity in its own transaction.

        Args:
            data: Entity data (either as a Pydantic model or dictionary)
            unique_field: Field reported when a unique constraint is violated

        Returns:
            The created entity

        Raises:
            DuplicateEntityError: If a unique constraint rejects the row
            RepositoryError: On other database errors
        """
        if isinstance(data, BaseModel):
            data_dict = data.model_dump(exclude_unset=True)
        else:
            data_dict = data

        entity = self.model_type(**data_dict)
        try:
            async with self.sessions.transaction_context() as db:
                db.add(entity)
                await db.flush()
            return entity
        except IntegrityError as e:
            raise DuplicateEntityError(
                self.model_type, unique_field, data_dict.get(unique_field)
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error creating entity: {e}") from e

    async def exists(self, **kwargs) -> bool:
        """
        Check if an entity exists with the given filters.

        Args:
            **kwargs: Field=value pairs to filter by

        Returns:
            True if entity exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        conditions = [getattr(self.model_type, field) == value for field, value in kwargs.items()]
        if not conditions:
            raise ValueError("No conditions provided for exists check")

        try:
            async with self.sessions.session_context() as db:
                query = select(func.count()).select_from(self.model_type).where(*conditions)
                result = await db.execute(query)
                return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error checking entity existence: {e}") from e
