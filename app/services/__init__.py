"""Service layer for the URL shortener application.

This package contains the business logic of the application: short code
allocation, redirect resolution, alias suggestion and QR rendering.
"""

from app.services.allocator import CodeAllocator, random_code_generator
from app.services.qr import QRCodeRenderer
from app.services.resolver import RedirectResolver
from app.services.suggester import suggest_alias

__all__ = [
    "CodeAllocator",
    "QRCodeRenderer",
    "RedirectResolver",
    "random_code_generator",
    "suggest_alias",
]
