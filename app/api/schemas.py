"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization. Field names on the wire are camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a short link.

    ``url`` is optional here so that a missing URL is reported by the
    allocator as a 400 instead of a schema error.
    """
    url: Optional[str] = None
    alias: Optional[str] = None


class ShortLinkResponse(BaseModel):
    """Response schema for a short link and its QR code."""
    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field(alias="shortUrl")
    short_code: str = Field(alias="shortCode")
    qr_code: str = Field(alias="qrCode", description="PNG image as a data URI")


class SuggestionResponse(BaseModel):
    """Response schema for an alias suggestion."""
    suggestion: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    error: str
