"""Repository layer for the URL shortener application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from app.repositories.base import (
    BaseRepository,
    RepositoryError,
    DuplicateEntityError
)
from app.repositories.mapping_repository import MappingRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",

    # Concrete repositories
    "MappingRepository",
]
