"""Short code allocation for the URL shortener application.

This module contains the CodeAllocator class which turns a URL and an
optional alias into a committed mapping, handling alias conflicts and
random-code collisions.
"""

import logging
from typing import Callable, Optional

from nanoid import generate

from app.core.config import settings
from app.models.mapping import URLMapping
from app.repositories.base import DuplicateEntityError, RepositoryError
from app.repositories.mapping_repository import MappingRepository
from app.services.exceptions import (
    AliasTakenError,
    AllocationExhaustedError,
    InvalidAliasError,
    InvalidURLError,
    StoreUnavailableError,
)
from app.services.validators import is_valid_alias, is_valid_url

logger = logging.getLogger(__name__)

CodeGenerator = Callable[[], str]


def random_code_generator(
    alphabet: Optional[str] = None,
    length: Optional[int] = None,
) -> CodeGenerator:
    """
    Build a generator of random short codes.

    Args:
        alphabet: Symbols to draw from (defaults to URL_CODE_CHARS)
        length: Code length (defaults to URL_CODE_LENGTH)

    Returns:
        A zero-argument callable returning a fresh code on every call
    """
    alphabet = alphabet or settings.URL_CODE_CHARS
    length = length or settings.URL_CODE_LENGTH

    def _generate() -> str:
        return generate(alphabet, length)

    return _generate


class CodeAllocator:
    """
    Allocates short codes and persists new mappings.

    Aliases and random codes go through the same insertion primitive; the
    store's uniqueness constraint decides which request wins a code.
    """

    def __init__(
        self,
        mapping_repository: MappingRepository,
        code_generator: Optional[CodeGenerator] = None,
        max_attempts: Optional[int] = None,
        alias_precheck: Optional[bool] = None,
    ):
        """
        Initialize the allocator.

        Args:
            mapping_repository: Store the mappings are written to
            code_generator: Source of random codes
            max_attempts: Random-code insertion attempts before giving up
            alias_precheck: Whether to look an alias up before inserting it
        """
        self.mapping_repository = mapping_repository
        self.code_generator = code_generator or random_code_generator()
        self.max_attempts = max_attempts or settings.URL_CODE_MAX_ATTEMPTS
        self.alias_precheck = (
            settings.ALIAS_PRECHECK_ENABLED if alias_precheck is None else alias_precheck
        )

    async def allocate(self, original_url: str, alias: Optional[str] = None) -> URLMapping:
        """
        Create a mapping for ``original_url``.

        Args:
            original_url: Absolute URL to shorten, stored verbatim
            alias: Optional desired short code; blank means generate one

        Returns:
            URLMapping: The committed mapping

        Raises:
            InvalidURLError: If the URL is missing or not absolute
            InvalidAliasError: If the alias cannot be used as a path segment
            AliasTakenError: If the alias is already mapped
            AllocationExhaustedError: If no free random code was found
            StoreUnavailableError: If the store fails
        """
        valid, message = is_valid_url(original_url)
        if not valid:
            raise InvalidURLError(message)

        alias = alias.strip() if isinstance(alias, str) else ""
        if alias:
            return await self._allocate_alias(original_url, alias)
        return await self._allocate_random(original_url)

    async def _allocate_alias(self, original_url: str, alias: str) -> URLMapping:
        valid, message = is_valid_alias(alias)
        if not valid:
            raise InvalidAliasError(message)

        try:
            if self.alias_precheck and await self.mapping_repository.check_short_code_exists(alias):
                raise AliasTakenError(f"Alias '{alias}' is already in use")

            mapping = await self.mapping_repository.insert(alias, original_url)
        except DuplicateEntityError:
            # Lost a race with a concurrent request for the same alias
            raise AliasTakenError(f"Alias '{alias}' is already in use")
        except RepositoryError as e:
            logger.error(f"Error creating mapping for alias '{alias}': {e}")
            raise StoreUnavailableError("Failed to save URL") from e

        logger.info(f"Created mapping '{mapping.short_code}' with custom alias")
        return mapping

    async def _allocate_random(self, original_url: str) -> URLMapping:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.code_generator()
            try:
                mapping = await self.mapping_repository.insert(candidate, original_url)
            except DuplicateEntityError:
                logger.warning(
                    f"Short code collision on attempt {attempt}/{self.max_attempts}: '{candidate}'"
                )
                continue
            except RepositoryError as e:
                logger.error(f"Error creating mapping: {e}")
                raise StoreUnavailableError("Failed to save URL") from e

            logger.info(f"Created mapping '{mapping.short_code}' on attempt {attempt}")
            return mapping

        logger.critical(
            f"Short code allocation exhausted after {self.max_attempts} attempts; "
            "the code space may be nearly full or the store is misbehaving"
        )
        raise AllocationExhaustedError(
            f"Failed to generate a unique short code after {self.max_attempts} attempts"
        )
