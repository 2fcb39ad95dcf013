"""Short code resolution for redirects."""

import logging

from app.models.mapping import URLMapping
from app.repositories.base import RepositoryError
from app.repositories.mapping_repository import MappingRepository
from app.services.exceptions import StoreUnavailableError, URLNotFoundError

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Looks up short codes. Codes are matched exactly, without normalization."""

    def __init__(self, mapping_repository: MappingRepository):
        self.mapping_repository = mapping_repository

    async def get_mapping(self, short_code: str) -> URLMapping:
        """
        Retrieve the mapping for a short code.

        Raises:
            URLNotFoundError: If no mapping with this code exists
            StoreUnavailableError: If the store fails
        """
        try:
            mapping = await self.mapping_repository.get_by_short_code(short_code)
        except RepositoryError as e:
            logger.error(f"Error retrieving URL by code: {e}")
            raise StoreUnavailableError("Database error") from e

        if mapping is None:
            raise URLNotFoundError(f"URL with code '{short_code}' not found")
        return mapping

    async def resolve(self, short_code: str) -> str:
        """Return the original URL stored for ``short_code``, verbatim."""
        mapping = await self.get_mapping(short_code)
        return mapping.original_url
