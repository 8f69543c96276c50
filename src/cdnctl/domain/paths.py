"""Path segment validation and public URL helpers.

INVARIANT: Every segment joined under the storage root has passed
:func:`is_safe_segment`. The HTTP path is attacker-controlled input.
"""

from __future__ import annotations

from typing import NamedTuple
from urllib.parse import quote

from cdnctl.domain.errors import InvalidInputError, InvalidPathError
from cdnctl.domain.models import strip_protocol

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def is_safe_segment(segment: str) -> bool:
    """Return True when *segment* names exactly one entry inside its parent."""
    if segment in ("", ".", ".."):
        return False
    return not any(ch in segment for ch in _FORBIDDEN_CHARS)


def require_safe_segments(*segments: str) -> None:
    """Raise :class:`InvalidPathError` for the first unsafe segment."""
    for segment in segments:
        if not is_safe_segment(segment):
            msg = f"Unsafe path segment: {segment!r}"
            raise InvalidPathError(msg)


class PublicLocation(NamedTuple):
    """A parsed public file URL."""

    host: str
    category: str
    filename: str


def parse_public_url(url: str) -> PublicLocation:
    """Split ``[scheme://]host/category/filename`` into its parts.

    >>> parse_public_url("https://cdn.example.com/images/abc.png")
    PublicLocation(host='cdn.example.com', category='images', filename='abc.png')
    """
    parts = strip_protocol(url.strip()).split("/")
    if len(parts) < 3 or not all(parts[:3]):
        msg = f"Invalid URL format: {url!r} (expected host/category/filename)"
        raise InvalidInputError(msg)
    return PublicLocation(parts[0], parts[1], parts[2])


def build_public_url(host: str, category: str, filename: str) -> str:
    """Public HTTPS URL of a stored blob, with the category URL-escaped."""
    return f"https://{host}/{quote(category, safe='')}/{filename}"
