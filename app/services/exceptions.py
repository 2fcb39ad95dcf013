"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class InvalidURLError(URLError):
    """The URL is missing or is not a valid absolute URL."""
    pass


class URLCreationError(URLError):
    """Error occurred during mapping creation."""
    pass


class InvalidAliasError(URLCreationError):
    """The requested alias cannot be used as a short code."""
    pass


class AliasTakenError(URLCreationError):
    """The requested alias is already mapped."""
    pass


class AllocationExhaustedError(URLCreationError):
    """No free random short code was found within the retry cap."""
    pass


class URLNotFoundError(URLError):
    """No mapping exists for the short code."""
    pass


class StoreUnavailableError(ServiceError):
    """The mapping store failed to complete an operation."""
    pass


class RenderingError(ServiceError):
    """QR code rendering failed."""
    pass
