"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from app.models.mapping import URLMapping, URLMappingBase, URLMappingCreate

__all__ = [
    "SQLModel",
    "URLMapping",
    "URLMappingBase",
    "URLMappingCreate",
]
