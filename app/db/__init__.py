"""Database module for the URL shortener application."""
from app.db.base import (
    DatabaseHealthCheck,
    get_engine,
    get_session_factory,
    init_models,
)
from app.db.session import SessionManager

__all__ = [
    "DatabaseHealthCheck",
    "get_engine",
    "get_session_factory",
    "init_models",
    "SessionManager",
]
