"""Resolver: inbound hostname to domain, and domain/category/file to bytes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cdnctl.domain.errors import CdnError
from cdnctl.domain.models import strip_protocol

if TYPE_CHECKING:
    from cdnctl.domain.models import Domain
    from cdnctl.infrastructure.blobstore import BlobContent, BlobStore
    from cdnctl.infrastructure.registry import Registry

logger = logging.getLogger(__name__)


class Resolver:
    """Read-only view over a registry and blob store for request handling."""

    def __init__(self, registry: Registry, blobs: BlobStore) -> None:
        self._registry = registry
        self._blobs = blobs

    def resolve_host(self, host: str) -> Domain | None:
        """Domain served on *host* (protocol prefix tolerated), or None."""
        return self._registry.get_domain_by_host(strip_protocol(host))

    def fetch(self, domain: str, category: str, filename: str) -> BlobContent | None:
        """Blob bytes and content type, or None for any failure.

        Unsafe segments and I/O faults are logged and reported exactly
        like a missing file.
        """
        try:
            return self._blobs.get(domain, category, filename)
        except CdnError as exc:
            logger.info("Fetch of %s/%s/%s failed: %s", domain, category, filename, exc)
            return None
