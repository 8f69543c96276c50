"""Registry: the in-memory catalog of domains and categories.

Two tables behind one reader-writer lock. Every public method takes the
lock, so no caller can observe a half-applied mutation, and no caller
gets raw access to the underlying dicts.

Persistence is explicit: ``add_*``/``remove_*`` only touch memory, and
``save_*`` writes the table to its JSON file. "Added but not yet saved"
is a visible state the caller must handle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from cdnctl.domain.errors import (
    AlreadyExistsError,
    CatalogMissingError,
    CatalogParseError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from cdnctl.domain.models import (
    Category,
    Domain,
    is_valid_folder_id,
    normalize_folder_id,
    strip_protocol,
)
from cdnctl.infrastructure.filesystem import read_json, write_json
from cdnctl.infrastructure.locking import ReadWriteLock

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

_RecordT = TypeVar("_RecordT", Domain, Category)


def _checked_folder_id(folder_id: str, kind: str) -> str:
    normalized = normalize_folder_id(folder_id.strip())
    if not is_valid_folder_id(normalized):
        msg = f"Invalid {kind} folder-name {folder_id!r}: must be non-empty with no whitespace"
        raise InvalidInputError(msg)
    return normalized


def _read_records(path: Path, model: type[_RecordT], kind: str) -> dict[str, _RecordT]:
    """Parse and validate a whole catalog file without touching any table."""
    try:
        raw = read_json(path)
    except FileNotFoundError as exc:
        msg = f"{kind.title()} catalog not found: {path}"
        raise CatalogMissingError(msg) from exc
    except OSError as exc:
        msg = f"Failed to read {kind} catalog {path}: {exc}"
        raise StorageError(msg) from exc
    except ValueError as exc:
        msg = f"Failed to parse {kind} catalog {path}: {exc}"
        raise CatalogParseError(msg) from exc

    if raw is None:
        raw = []
    if not isinstance(raw, list):
        msg = f"Failed to parse {kind} catalog {path}: expected a JSON array"
        raise CatalogParseError(msg)

    records: dict[str, _RecordT] = {}
    hosts: set[str] = set()
    for index, item in enumerate(raw):
        try:
            record = model.model_validate(item)
        except ValueError as exc:
            msg = f"Failed to parse {kind} catalog {path}: record {index}: {exc}"
            raise CatalogParseError(msg) from exc
        folder_id = normalize_folder_id(record.folder_id)
        if not is_valid_folder_id(folder_id):
            msg = f"Invalid folder-name {record.folder_id!r} in {path} (record {index})"
            raise CatalogParseError(msg)
        if folder_id in records:
            msg = f"Duplicate folder-name {folder_id!r} in {path}"
            raise CatalogParseError(msg)
        if isinstance(record, Domain):
            if record.public_host in hosts:
                msg = f"Duplicate domain-fqdn {record.public_host!r} in {path}"
                raise CatalogParseError(msg)
            hosts.add(record.public_host)
        records[folder_id] = record.model_copy(update={"folder_id": folder_id})
    return records


def _write_records(path: Path, records: Sequence[BaseModel], kind: str) -> None:
    payload: list[dict[str, Any]] = [r.model_dump(by_alias=True) for r in records]
    try:
        write_json(path, payload)
    except OSError as exc:
        msg = f"Failed to write {kind} catalog {path}: {exc}"
        raise StorageError(msg) from exc


class Registry:
    """Concurrency-safe catalog of :class:`Domain` and :class:`Category` records.

    Tables keep insertion order, which is also the order of the
    persisted files.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._domains: dict[str, Domain] = {}
        self._categories: dict[str, Category] = {}

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def add_domain(self, folder_id: str, display_name: str, public_host: str) -> Domain:
        """Register a domain; raises :class:`AlreadyExistsError` on duplicates.

        Duplicate means the same normalized folder id or the same public
        host. Host lookups rely on hosts being unique.
        """
        normalized = _checked_folder_id(folder_id, "domain")
        host = strip_protocol(public_host.strip())
        if not host:
            msg = "Domain public host must not be empty"
            raise InvalidInputError(msg)

        domain = Domain(folder_id=normalized, display_name=display_name, public_host=host)
        with self._lock.write():
            if normalized in self._domains:
                msg = f"Domain with folder-name '{normalized}' already exists"
                raise AlreadyExistsError(msg)
            for existing in self._domains.values():
                if existing.public_host == host:
                    msg = f"Host '{host}' is already served by domain '{existing.folder_id}'"
                    raise AlreadyExistsError(msg)
            self._domains[normalized] = domain
        logger.debug("Added domain %s (%s)", normalized, host)
        return domain

    def remove_domain(self, folder_id: str) -> Domain:
        """Unregister a domain. Blobs stored under it stay on disk."""
        with self._lock.write():
            domain = self._domains.pop(folder_id, None)
        if domain is None:
            msg = f"Domain '{folder_id}' not found"
            raise NotFoundError(msg)
        logger.debug("Removed domain %s", folder_id)
        return domain

    def get_domain(self, folder_id: str) -> Domain | None:
        with self._lock.read():
            return self._domains.get(folder_id)

    def get_domain_by_host(self, public_host: str) -> Domain | None:
        """Reverse lookup by exact, case-sensitive host comparison."""
        with self._lock.read():
            for domain in self._domains.values():
                if domain.public_host == public_host:
                    return domain
        return None

    def domain_exists(self, folder_id: str) -> bool:
        with self._lock.read():
            return folder_id in self._domains

    def get_domain_display_name(self, folder_id: str) -> str | None:
        domain = self.get_domain(folder_id)
        return domain.display_name if domain else None

    def get_domain_host(self, folder_id: str) -> str | None:
        domain = self.get_domain(folder_id)
        return domain.public_host if domain else None

    def list_domains(self) -> list[Domain]:
        with self._lock.read():
            return list(self._domains.values())

    def first_domain(self) -> Domain | None:
        """The earliest registered domain, used as the last-resort upload target."""
        with self._lock.read():
            return next(iter(self._domains.values()), None)

    def has_domains(self) -> bool:
        with self._lock.read():
            return bool(self._domains)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, folder_id: str, display_name: str) -> Category:
        normalized = _checked_folder_id(folder_id, "category")
        category = Category(folder_id=normalized, display_name=display_name)
        with self._lock.write():
            if normalized in self._categories:
                msg = f"Category with folder-name '{normalized}' already exists"
                raise AlreadyExistsError(msg)
            self._categories[normalized] = category
        logger.debug("Added category %s", normalized)
        return category

    def remove_category(self, folder_id: str) -> Category:
        with self._lock.write():
            category = self._categories.pop(folder_id, None)
        if category is None:
            msg = f"Category '{folder_id}' not found"
            raise NotFoundError(msg)
        logger.debug("Removed category %s", folder_id)
        return category

    def get_category(self, folder_id: str) -> Category | None:
        with self._lock.read():
            return self._categories.get(folder_id)

    def category_exists(self, folder_id: str) -> bool:
        with self._lock.read():
            return folder_id in self._categories

    def get_category_display_name(self, folder_id: str) -> str | None:
        category = self.get_category(folder_id)
        return category.display_name if category else None

    def list_categories(self) -> list[Category]:
        with self._lock.read():
            return list(self._categories.values())

    def has_categories(self) -> bool:
        with self._lock.read():
            return bool(self._categories)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_domains(self, path: Path) -> int:
        """Replace the domain table with the contents of *path*.

        The table is untouched unless the whole file parses. Returns the
        number of records loaded.
        """
        records = _read_records(path, Domain, "domains")
        with self._lock.write():
            self._domains = records
        logger.info("Loaded %d domains from %s", len(records), path)
        return len(records)

    def save_domains(self, path: Path) -> None:
        with self._lock.read():
            _write_records(path, list(self._domains.values()), "domains")

    def load_categories(self, path: Path) -> int:
        """Replace the category table with the contents of *path*."""
        records = _read_records(path, Category, "categories")
        with self._lock.write():
            self._categories = records
        logger.info("Loaded %d categories from %s", len(records), path)
        return len(records)

    def save_categories(self, path: Path) -> None:
        with self._lock.read():
            _write_records(path, list(self._categories.values()), "categories")
