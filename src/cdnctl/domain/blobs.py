"""Blob naming and validation tokens.

Generated filenames are a random UUID4 plus the caller's extension,
never derived from the uploaded name. ETags are derived from content only.
"""

from __future__ import annotations

import hashlib
import uuid

ETAG_BYTES = 8


def generate_filename(extension: str) -> str:
    """Return ``{uuid4}{extension}``; *extension* is appended unmodified."""
    return f"{uuid.uuid4()}{extension}"


def compute_etag(data: bytes) -> str:
    """Quoted hex of the first 8 bytes of the SHA-256 digest of *data*."""
    digest = hashlib.sha256(data).digest()[:ETAG_BYTES]
    return f'"{digest.hex()}"'
