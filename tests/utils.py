"""Test utilities for URL shortener tests."""

import random
import string
from typing import Iterable, List, Optional

from app.models.mapping import URLMapping
from app.repositories.mapping_repository import MappingRepository
from app.services.exceptions import RenderingError
from app.services.qr import QRCodeRenderer


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_mapping(
    repository: MappingRepository,
    short_code: Optional[str] = None,
    original_url: Optional[str] = None,
) -> URLMapping:
    """Create and persist a test mapping."""
    return await repository.insert(
        short_code or random_string(6),
        original_url or random_url(),
    )


class SequenceCodeGenerator:
    """Code generator returning a fixed sequence of codes, recording every call."""

    def __init__(self, codes: Iterable[str]):
        self._codes = iter(codes)
        self.generated: List[str] = []

    def __call__(self) -> str:
        code = next(self._codes)
        self.generated.append(code)
        return code


class FailingQRCodeRenderer(QRCodeRenderer):
    """QR renderer whose every render fails."""

    async def render_data_uri_async(self, data: str) -> str:
        raise RenderingError("Failed to generate QR code")
