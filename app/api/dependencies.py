"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints.
The store is built once at startup and kept on ``app.state``; services are
cheap and built per request around it.
"""

from urllib.parse import quote

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import settings
from app.repositories.mapping_repository import MappingRepository
from app.services.allocator import CodeAllocator
from app.services.qr import QRCodeRenderer
from app.services.resolver import RedirectResolver


def get_engine(request: Request) -> AsyncEngine:
    """Get the database engine created at startup."""
    return request.app.state.engine


def get_mapping_repository(request: Request) -> MappingRepository:
    """Get the mapping store created at startup."""
    return request.app.state.mapping_repository


def get_allocator(
    mapping_repository: MappingRepository = Depends(get_mapping_repository),
) -> CodeAllocator:
    """Get an instance of the code allocator."""
    return CodeAllocator(mapping_repository)


def get_resolver(
    mapping_repository: MappingRepository = Depends(get_mapping_repository),
) -> RedirectResolver:
    """Get an instance of the redirect resolver."""
    return RedirectResolver(mapping_repository)


def get_qr_renderer() -> QRCodeRenderer:
    """Get an instance of the QR code renderer."""
    return QRCodeRenderer()


def get_base_url(request: Request) -> str:
    """Get the base URL for short links.

    BASE_URL wins when configured; otherwise the scheme and host of the
    incoming request are used.
    """
    if settings.BASE_URL:
        return settings.BASE_URL
    return f"{request.url.scheme}://{request.url.netloc}"


def build_short_url(base_url: str, short_code: str) -> str:
    """Join the base URL and a percent-encoded short code into the public short link."""
    return f"{base_url.rstrip('/')}/{quote(short_code, safe='')}"
