"""Tests for how service failures are reported over HTTP."""

from unittest.mock import AsyncMock

import pytest

from app.api.dependencies import get_allocator, get_mapping_repository, get_qr_renderer
from app.repositories.base import RepositoryError
from app.repositories.mapping_repository import MappingRepository
from app.services.allocator import CodeAllocator
from tests.utils import FailingQRCodeRenderer, SequenceCodeGenerator, create_test_mapping


@pytest.fixture
def broken_store(test_app):
    """Replace the mapping store with one whose every call fails."""
    repository = AsyncMock(spec=MappingRepository)
    repository.insert.side_effect = RepositoryError("connection refused")
    repository.get_by_short_code.side_effect = RepositoryError("connection refused")
    repository.check_short_code_exists.side_effect = RepositoryError("connection refused")
    test_app.dependency_overrides[get_mapping_repository] = lambda: repository
    return repository


@pytest.mark.api
class TestServerErrors:
    """Operational failures answer 500 with an error body."""

    @pytest.mark.asyncio
    async def test_shorten_store_unavailable(self, client, broken_store):
        response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save URL"}

    @pytest.mark.asyncio
    async def test_shorten_alias_store_unavailable(self, client, broken_store):
        response = await client.post("/api/shorten", json={"url": "https://example.com", "alias": "promo"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save URL"}

    @pytest.mark.asyncio
    async def test_shorten_allocation_exhausted(self, client, test_app, mapping_repository):
        await create_test_mapping(mapping_repository, short_code="always")
        test_app.dependency_overrides[get_allocator] = lambda: CodeAllocator(
            mapping_repository,
            code_generator=SequenceCodeGenerator(["always"] * 3),
            max_attempts=3,
        )

        response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate a unique short code after 3 attempts"
        }

    @pytest.mark.asyncio
    async def test_redirect_store_unavailable(self, client, broken_store):
        response = await client.get("/abc123")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}

    @pytest.mark.asyncio
    async def test_qr_store_unavailable(self, client, broken_store):
        response = await client.get("/api/qr/abc123")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}

    @pytest.mark.asyncio
    async def test_qr_rendering_failure(self, client, test_app, mapping_repository):
        await create_test_mapping(mapping_repository, short_code="abc123")
        test_app.dependency_overrides[get_qr_renderer] = lambda: FailingQRCodeRenderer()

        response = await client.get("/api/qr/abc123")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate QR code"}
