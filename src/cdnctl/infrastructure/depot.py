"""Depot: the single dependency injected into every service.

The Depot owns the registry, the blob store, and the binding store, and
knows where the catalog files live. Constructing one performs startup
loading: a missing catalog file is created empty, a malformed or
unreadable one is logged and the catalog starts empty. Neither stops
the process, but a catalog that failed to load refuses to be saved
until a later load succeeds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cdnctl.domain.errors import (
    CatalogMissingError,
    CatalogParseError,
    CdnError,
    StorageError,
)
from cdnctl.infrastructure.bindings import BindingStore
from cdnctl.infrastructure.blobstore import BlobStore
from cdnctl.infrastructure.registry import Registry

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from cdnctl.config.settings import CdnSettings

logger = logging.getLogger(__name__)

DOMAINS = "domains"
CATEGORIES = "categories"


class Depot:
    """Registry + blob store + bindings for one configured installation.

    Usage::

        depot = Depot(settings)
        depot.registry.add_domain("main", "Main CDN", "cdn.example.com")
        depot.save_domains()
    """

    def __init__(self, settings: CdnSettings) -> None:
        self._settings = settings
        self.registry = Registry()
        self._paths = {DOMAINS: settings.domains_path, CATEGORIES: settings.categories_path}
        self._unloaded: dict[str, CdnError] = {}
        self.load_catalogs()
        self.blobs = BlobStore(settings.storage_path)
        self.bindings = BindingStore(settings.bindings_path)

    @property
    def settings(self) -> CdnSettings:
        return self._settings

    @property
    def domains_path(self) -> Path:
        return self._settings.domains_path

    @property
    def categories_path(self) -> Path:
        return self._settings.categories_path

    # ------------------------------------------------------------------
    # Catalog persistence
    # ------------------------------------------------------------------

    def load_catalogs(self) -> None:
        """Load both catalog files, tolerating missing or broken ones."""
        self._load_or_create(DOMAINS, self.domains_path)
        self._load_or_create(CATEGORIES, self.categories_path)

    def _load_or_create(self, kind: str, path: Path) -> None:
        try:
            self.load(kind)
        except CatalogMissingError:
            logger.info("%s config not found, creating empty file: %s", kind.title(), path)
            try:
                self._save(kind)
            except StorageError as exc:
                logger.warning("Failed to create empty %s config: %s", kind, exc)
        except CdnError as exc:
            logger.warning("Failed to load %s config: %s", kind, exc)

    def load(self, kind: str) -> None:
        """Replace the *kind* table from its file.

        A failure marks the catalog unwritable until a later load
        succeeds, so the empty table is never saved over the file.
        """
        load, _ = self._io(kind)
        try:
            load(self._paths[kind])
        except CatalogMissingError:
            self._unloaded.pop(kind, None)
            raise
        except CdnError as exc:
            self._unloaded[kind] = exc
            raise
        self._unloaded.pop(kind, None)

    def require_loaded(self, kind: str) -> None:
        """Raise :class:`CatalogParseError` if *kind* failed to load."""
        exc = self._unloaded.get(kind)
        if exc is not None:
            msg = (
                f"The {kind} catalog {self._paths[kind]} could not be loaded ({exc}); "
                "fix the file before changing it"
            )
            raise CatalogParseError(msg)

    def _io(self, kind: str) -> tuple[Callable[[Path], object], Callable[[Path], None]]:
        if kind == DOMAINS:
            return self.registry.load_domains, self.registry.save_domains
        return self.registry.load_categories, self.registry.save_categories

    def _save(self, kind: str) -> None:
        self.require_loaded(kind)
        _, save = self._io(kind)
        save(self._paths[kind])

    def save_domains(self) -> None:
        self._save(DOMAINS)

    def save_categories(self) -> None:
        self._save(CATEGORIES)
