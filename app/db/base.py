"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Session factory setup
- Metadata management
- Health check functionality

Nothing here is created at import time; the application builds its engine
during startup and hands it to the components that need it.
"""

from typing import Any, Dict, Optional
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from app.core.config import settings

# Import models so they are registered with SQLModel metadata
from app.models import URLMapping  # noqa: F401

logger = logging.getLogger(__name__)


def get_engine_config(database_url: str) -> Dict[str, Any]:
    """Get engine parameters suited to the database backend.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Dict: Engine configuration parameters
    """
    url = make_url(database_url)
    config: Dict[str, Any] = {"echo": settings.DB_ECHO}

    if url.get_backend_name() == "sqlite":
        config["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # A single shared connection keeps the in-memory database alive
            config["poolclass"] = StaticPool
        return config

    config.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )
    return config


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        database_url: Optional URL overriding the configured one

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = database_url or settings.SQLALCHEMY_DATABASE_URI

    logger.info(
        f"Creating database engine with URL: {make_url(engine_url).render_as_string(hide_password=True)}"
    )

    return create_async_engine(engine_url, **get_engine_config(engine_url))


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the async session factory bound to an engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create the tables that don't exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables initialized")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def check_connection(self) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = round((loop.time() - start_time) * 1000, 2)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
