"""Tests for the mapping repository."""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy import DateTime, select

from app.models.mapping import URLMapping, utcnow
from app.repositories.base import DuplicateEntityError
from app.services.allocator import CodeAllocator
from app.services.exceptions import AliasTakenError
from tests.utils import create_test_mapping, random_url


@pytest.mark.repository
class TestMappingRepository:
    """Test suite for the mapping repository."""

    @pytest.mark.asyncio
    async def test_insert(self, mapping_repository):
        """Test mapping creation."""
        test_url = random_url()

        mapping = await mapping_repository.insert("testcreate", test_url)

        assert mapping.short_code == "testcreate"
        assert mapping.original_url == test_url

        db_mapping = await mapping_repository.get_by_short_code("testcreate")
        assert db_mapping is not None
        assert db_mapping.original_url == test_url

    @pytest.mark.asyncio
    async def test_insert_sets_created_at(self, mapping_repository):
        before = utcnow() - timedelta(seconds=1)

        mapping = await create_test_mapping(mapping_repository, short_code="stamped")
        stored = await mapping_repository.get_by_short_code("stamped")

        assert mapping.created_at >= before
        assert stored.created_at == mapping.created_at

    @pytest.mark.asyncio
    async def test_insert_stores_url_verbatim(self, mapping_repository):
        url = "https://Example.com/Path/?q=a%20b&x=1#Frag"

        await mapping_repository.insert("verbatim", url)
        stored = await mapping_repository.get_by_short_code("verbatim")

        assert stored.original_url == url

    @pytest.mark.asyncio
    async def test_insert_duplicate_short_code(self, mapping_repository):
        """Test duplicate short code handling."""
        await create_test_mapping(mapping_repository, short_code="duplicate")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await mapping_repository.insert("duplicate", random_url())

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == "duplicate"

    @pytest.mark.asyncio
    async def test_duplicate_does_not_overwrite(self, mapping_repository, session_manager):
        """A rejected insert leaves the existing row untouched and adds none."""
        first_url = random_url()
        await mapping_repository.insert("keep", first_url)

        with pytest.raises(DuplicateEntityError):
            await mapping_repository.insert("keep", random_url())

        async with session_manager.session_context() as db:
            result = await db.execute(select(URLMapping))
            rows = result.scalars().all()

        assert len(rows) == 1
        assert rows[0].original_url == first_url

    @pytest.mark.asyncio
    async def test_repository_usable_after_duplicate(self, mapping_repository):
        await create_test_mapping(mapping_repository, short_code="taken")

        with pytest.raises(DuplicateEntityError):
            await mapping_repository.insert("taken", random_url())

        mapping = await mapping_repository.insert("fresh", "https://example.com")
        assert mapping.short_code == "fresh"

    @pytest.mark.asyncio
    async def test_get_by_short_code_nonexistent(self, mapping_repository):
        """Test retrieving nonexistent mapping."""
        assert await mapping_repository.get_by_short_code("nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_by_short_code_is_exact(self, mapping_repository):
        """Lookups are case sensitive and don't strip trailing slashes."""
        await create_test_mapping(mapping_repository, short_code="AbC")

        assert await mapping_repository.get_by_short_code("AbC") is not None
        assert await mapping_repository.get_by_short_code("abc") is None
        assert await mapping_repository.get_by_short_code("AbC/") is None

    @pytest.mark.asyncio
    async def test_check_short_code_exists(self, mapping_repository):
        """Test short code existence check."""
        await create_test_mapping(mapping_repository, short_code="exists")

        assert await mapping_repository.check_short_code_exists("exists") is True
        assert await mapping_repository.check_short_code_exists("nonexistent") is False

    @pytest.mark.asyncio
    async def test_created_at_round_trips_as_naive_utc(self, mapping_repository):
        mapping = await create_test_mapping(mapping_repository, short_code="naive")

        stored = await mapping_repository.get_by_short_code("naive")

        assert mapping.created_at.tzinfo is None
        assert stored.created_at.tzinfo is None
        assert abs(utcnow() - stored.created_at) < timedelta(minutes=1)

    def test_created_at_column_is_naive_datetime(self):
        column_type = URLMapping.__table__.c.created_at.type

        assert isinstance(column_type, DateTime)
        assert column_type.timezone is False

    @pytest.mark.asyncio
    async def test_concurrent_inserts_of_one_code(self, file_mapping_repository):
        """Of several concurrent inserts for the same code exactly one wins."""
        results = await asyncio.gather(
            *(file_mapping_repository.insert("same", random_url()) for _ in range(5)),
            return_exceptions=True,
        )

        winners = [r for r in results if isinstance(r, URLMapping)]
        losers = [r for r in results if isinstance(r, DuplicateEntityError)]
        assert len(winners) == 1
        assert len(losers) == 4

        stored = await file_mapping_repository.get_by_short_code("same")
        assert stored.original_url == winners[0].original_url

    @pytest.mark.asyncio
    async def test_concurrent_alias_allocations(self, file_mapping_repository):
        allocator = CodeAllocator(file_mapping_repository, alias_precheck=False)

        results = await asyncio.gather(
            *(allocator.allocate(random_url(), alias="same") for _ in range(5)),
            return_exceptions=True,
        )

        assert sum(isinstance(r, URLMapping) for r in results) == 1
        assert sum(isinstance(r, AliasTakenError) for r in results) == 4
