"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
"""

from typing import AsyncGenerator
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SessionManager:
    """Session manager for database operations with context manager support.

    Wraps a session factory built at startup. Every context opens its own
    session, so each unit of work is isolated from concurrent requests.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @asynccontextmanager
    async def session_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for a read-only session.

        Yields:
            AsyncSession: SQLAlchemy async session
        """
        session = self.session_factory()
        try:
            yield session
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for a database session with transaction support.

        Automatically commits on successful completion or rolls back on error.

        Yields:
            AsyncSession: SQLAlchemy async session

        Example:
            ```python
            async with sessions.transaction_context() as session:
                session.add(URLMapping(short_code="abc123", original_url=url))
                # Commits automatically on context exit if no errors
            ```
        """
        async with self.session_context() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.debug(f"Transaction rolled back: {e}")
                raise
