"""Validation utilities for URLs and aliases."""

import ipaddress
import re
from typing import Tuple
from urllib.parse import SplitResult, unquote, urlsplit

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

# Schemes whose authority and path treat "\" like "/" in browsers
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})

# Code points a browser refuses inside a domain name
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f#%/:<>?@\[\\\]^|]")

# Characters that would stop an alias from round-tripping as one path segment
_ALIAS_FORBIDDEN = re.compile(r"[/?#%\s\x00-\x1f\x7f]")


def split_url(url: str) -> SplitResult:
    """Split a URL the way a browser reads it.

    For special schemes a backslash before the query or fragment is read
    as a slash.

    Raises:
        ValueError: If the URL cannot be split
    """
    parts = urlsplit(url)
    if parts.scheme.lower() in SPECIAL_SCHEMES and "\\" in url:
        end = min((i for i in (url.find("?"), url.find("#")) if i != -1), default=len(url))
        parts = urlsplit(url[:end].replace("\\", "/") + url[end:])
    return parts


def is_valid_host(parts: SplitResult) -> bool:
    """Check the host of an already split URL."""
    hostname = parts.hostname
    if not hostname:
        return False

    if "[" in parts.netloc:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            return False
        return True

    hostname = unquote(hostname)
    if _FORBIDDEN_HOST_CHARS.search(hostname):
        return False

    if not hostname.isascii():
        try:
            hostname.encode("idna")
        except UnicodeError:
            return False

    return True


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute URL.

    The URL must carry a scheme and a host a browser would accept. It is
    not normalized.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    try:
        result = split_url(url)
        result.port  # raises ValueError for a malformed port
    except ValueError:
        return False, "Invalid URL format"

    if not result.scheme or not _SCHEME_PATTERN.match(result.scheme):
        return False, "Invalid URL format"

    if not is_valid_host(result):
        return False, "Invalid URL format"

    return True, ""


def is_valid_alias(alias: str) -> Tuple[bool, str]:
    """Validate a custom alias.

    Args:
        alias: The alias, already trimmed

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not alias:
        return False, "Alias is required"

    if alias in (".", ".."):
        return False, "Alias cannot be a relative path segment"

    if _ALIAS_FORBIDDEN.search(alias):
        return False, "Alias cannot contain '/', '?', '#', '%', whitespace or control characters"

    return True, ""
