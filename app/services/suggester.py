"""Alias suggestion heuristic.

Derives a readable alias candidate from the structure of a URL. The result
is advisory: it is never checked for availability.
"""

import re
from typing import List
from urllib.parse import quote

from app.core.config import settings
from app.services.validators import is_valid_host, split_url

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9-]")

# Printable ASCII a browser leaves unescaped in a path
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"

_SINGLE_DOT = (".", "%2e")
_DOUBLE_DOT = ("..", ".%2e", "%2e.", "%2e%2e")


def path_segments(path: str) -> List[str]:
    """
    Split a URL path into its non-empty segments after browser normalization.

    Unsafe characters are percent-encoded and ``.``/``..`` segments are
    resolved, as in ``new URL(...).pathname``.
    """
    segments: List[str] = []
    for segment in quote(path, safe=_PATH_SAFE).split("/"):
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT:
            if segments:
                segments.pop()
        elif lowered not in _SINGLE_DOT and segment:
            segments.append(segment)
    return segments


def suggest_alias(
    url: str,
    max_length: int = None,
    fallback: str = None,
) -> str:
    """
    Suggest an alias for ``url``.

    Uses the last two path segments joined by a hyphen, or, for bare hosts,
    the hostname labels without the top-level domain when a subdomain is
    present, else the first label. The result keeps only ``[A-Za-z0-9-]``
    and is truncated to ``max_length``.

    Never raises: anything that cannot be parsed yields ``fallback``.

    Examples:
        >>> suggest_alias("https://github.com/openai/gym")
        'openai-gym'
        >>> suggest_alias("https://blog.example.com")
        'blog-example'
        >>> suggest_alias("not a url")
        'link'
    """
    if max_length is None:
        max_length = settings.ALIAS_SUGGESTION_MAX_LENGTH
    if fallback is None:
        fallback = settings.ALIAS_SUGGESTION_FALLBACK

    if not isinstance(url, str):
        return fallback

    try:
        parts = split_url(url.strip())
        # Accessing port validates it
        parts.port
    except ValueError:
        return fallback

    if not parts.scheme or not is_valid_host(parts):
        return fallback

    segments = path_segments(parts.path)
    labels = parts.hostname.split(".")

    if segments:
        suggestion = "-".join(segments[-2:])
    elif len(labels) > 2:
        suggestion = "-".join(labels[:-1])
    else:
        suggestion = labels[0]

    suggestion = _DISALLOWED_CHARS.sub("", suggestion)[:max_length]
    return suggestion or fallback
