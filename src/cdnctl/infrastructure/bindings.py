"""Binding store: the global default target and named per-source bindings.

Bindings are how callers upload without naming a domain and category
each time. The registry knows nothing about them, so removing a domain
or category that a binding still references is blocked one layer up,
by the catalog service, using :meth:`BindingStore.references_domain`.

The file layout (``global_defaults`` + ``channel_configs``) is shared
with earlier releases.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cdnctl.domain.errors import CatalogParseError, NotFoundError, StorageError
from cdnctl.domain.models import Binding
from cdnctl.infrastructure.filesystem import read_json, write_json
from cdnctl.infrastructure.locking import ReadWriteLock

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

GLOBAL_DEFAULT_LABEL = "(global default)"


class BindingStore:
    """Persisted bindings; every mutation is saved immediately."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = ReadWriteLock()
        self._defaults = Binding()
        self._bindings: dict[str, Binding] = {}
        try:
            self._load()
        except FileNotFoundError:
            logger.info("Binding file not found, creating empty file: %s", path)
            self._save()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        try:
            raw = read_json(self._path)
        except FileNotFoundError:
            raise
        except OSError as exc:
            msg = f"Failed to read bindings {self._path}: {exc}"
            raise StorageError(msg) from exc
        except ValueError as exc:
            msg = f"Failed to parse bindings {self._path}: {exc}"
            raise CatalogParseError(msg) from exc

        if not isinstance(raw, dict):
            msg = f"Failed to parse bindings {self._path}: expected a JSON object"
            raise CatalogParseError(msg)
        try:
            defaults = Binding.model_validate(raw.get("global_defaults") or {})
            bindings = {
                str(name): Binding.model_validate(value)
                for name, value in (raw.get("channel_configs") or {}).items()
            }
        except (ValueError, AttributeError) as exc:
            msg = f"Failed to parse bindings {self._path}: {exc}"
            raise CatalogParseError(msg) from exc

        with self._lock.write():
            self._defaults = defaults
            self._bindings = bindings

    def _save(self) -> None:
        with self._lock.read():
            payload: dict[str, Any] = {
                "global_defaults": self._defaults.model_dump(),
                "channel_configs": {n: b.model_dump() for n, b in self._bindings.items()},
            }
        try:
            write_json(self._path, payload)
        except OSError as exc:
            msg = f"Failed to write bindings {self._path}: {exc}"
            raise StorageError(msg) from exc

    # ------------------------------------------------------------------
    # Global default
    # ------------------------------------------------------------------

    def set_global_defaults(self, domain: str, category: str) -> None:
        with self._lock.write():
            self._defaults = Binding(domain=domain, category=category)
        self._save()

    def get_global_defaults(self) -> Binding:
        with self._lock.read():
            return self._defaults

    def has_global_defaults(self) -> bool:
        return self.get_global_defaults().complete

    # ------------------------------------------------------------------
    # Named bindings
    # ------------------------------------------------------------------

    def set_binding(self, name: str, domain: str, category: str) -> None:
        with self._lock.write():
            self._bindings[name] = Binding(domain=domain, category=category)
        self._save()

    def get_binding(self, name: str) -> Binding | None:
        with self._lock.read():
            return self._bindings.get(name)

    def remove_binding(self, name: str) -> None:
        with self._lock.write():
            removed = self._bindings.pop(name, None)
        if removed is None:
            msg = f"No binding named '{name}'"
            raise NotFoundError(msg)
        self._save()

    def list_bindings(self) -> dict[str, Binding]:
        """A snapshot copy; mutating it does not touch the store."""
        with self._lock.read():
            return dict(self._bindings)

    # ------------------------------------------------------------------
    # Reference checks
    # ------------------------------------------------------------------

    def references_domain(self, folder_id: str) -> list[str]:
        """Names of bindings (and the global default) targeting *folder_id*."""
        with self._lock.read():
            refs = [GLOBAL_DEFAULT_LABEL] if self._defaults.domain == folder_id else []
            refs.extend(n for n, b in self._bindings.items() if b.domain == folder_id)
        return refs

    def references_category(self, folder_id: str) -> list[str]:
        with self._lock.read():
            refs = [GLOBAL_DEFAULT_LABEL] if self._defaults.category == folder_id else []
            refs.extend(n for n, b in self._bindings.items() if b.category == folder_id)
        return refs
