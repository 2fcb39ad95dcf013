"""URL mapping data models.

This module defines the URLMapping model that stores the association
between a short code and the original URL it redirects to.
"""
from datetime import datetime, timezone

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, as stored by the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class URLMappingBase(SQLModel):
    """Base model for URL mapping data."""

    short_code: str = Field(
        primary_key=True,
        description="Unique code used as the path segment of the short URL"
    )
    original_url: str = Field(
        nullable=False,
        description="The original (long) URL to redirect to, stored verbatim"
    )


class URLMapping(URLMappingBase, table=True):
    """
    URL mapping stored in the database.

    Rows are immutable once inserted. The primary key on short_code is the
    only concurrency control: of several concurrent inserts for the same
    code exactly one succeeds.
    """

    __tablename__ = "urls"

    created_at: NaiveDatetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=False),
        nullable=False,
        description="Timestamp when this mapping was created"
    )


class URLMappingCreate(URLMappingBase):
    """Schema for creating a new URL mapping."""
    pass
