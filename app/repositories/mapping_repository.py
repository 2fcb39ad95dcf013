"""Mapping repository for the URL shortener application.

This module provides the MappingRepository class, the persistent store of
short_code -> original_url mappings. Rows are only ever inserted and read.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import SessionManager
from app.models.mapping import URLMapping, URLMappingCreate
from app.repositories.base import BaseRepository, RepositoryError


class MappingRepository(BaseRepository[URLMapping, URLMappingCreate]):
    """
    Repository for URLMapping database operations.

    insert() is an atomic insert-if-absent: a taken short code raises
    DuplicateEntityError and never overwrites the existing row.
    """

    def __init__(self, sessions: SessionManager):
        super().__init__(URLMapping, sessions)

    async def insert(self, short_code: str, original_url: str) -> URLMapping:
        """
        Persist a new mapping.

        Args:
            short_code: The unique short code
            original_url: The URL to store verbatim

        Returns:
            The committed URLMapping

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        data = URLMappingCreate(short_code=short_code, original_url=original_url)
        return await self.create(data, unique_field="short_code")

    async def get_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        """
        Find a mapping by exact short code.

        Args:
            short_code: The short code to look up

        Returns:
            The URLMapping if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            async with self.sessions.session_context() as db:
                query = select(URLMapping).where(URLMapping.short_code == short_code)
                result = await db.execute(query)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving URL by short code: {e}") from e

    async def check_short_code_exists(self, short_code: str) -> bool:
        """
        Check if a short code is already taken.

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(short_code=short_code)
