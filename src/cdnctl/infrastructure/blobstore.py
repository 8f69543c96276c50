"""Blob store: file bytes under ``{root}/{domain}/{category}/{filename}``.

The directory tree is the only index: there is no metadata file, and
the content type of a blob is re-derived on every read from its
extension, falling back to sniffing the leading bytes with libmagic.

INVARIANT: Blobs are immutable. There is store and delete, no update.
"""

from __future__ import annotations

import errno
import logging
import mimetypes
from pathlib import Path
from typing import NamedTuple

import magic

from cdnctl.domain.blobs import generate_filename
from cdnctl.domain.errors import InvalidPathError, NotFoundError, StorageError
from cdnctl.domain.paths import require_safe_segments
from cdnctl.infrastructure.filesystem import TEMP_PREFIX, write_bytes_atomic
from cdnctl.infrastructure.locking import ReadWriteLock

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# libmagic only needs the head of a file to classify it.
_SNIFF_BYTES = 2048


class StoredBlob(NamedTuple):
    filename: str
    size: int


class BlobContent(NamedTuple):
    data: bytes
    content_type: str


def detect_content_type(filename: str, data: bytes) -> str:
    """Extension lookup first, then content sniffing of the first bytes."""
    guessed, _ = mimetypes.guess_type(filename, strict=False)
    if guessed:
        return guessed
    if data:
        sniffed = magic.from_buffer(data[:_SNIFF_BYTES], mime=True)
        if sniffed:
            return sniffed
    return DEFAULT_CONTENT_TYPE


class BlobStore:
    """Filesystem-backed store guarded by a single reader-writer lock."""

    def __init__(self, root: Path) -> None:
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Failed to create storage directory {root}: {exc}"
            raise StorageError(msg) from exc
        self._root = root
        self._resolved_root = root.resolve()
        self._lock = ReadWriteLock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, *segments: str) -> Path:
        require_safe_segments(*segments)
        path = self._root.joinpath(*segments)
        # Guard against symlinked directories pointing outside the store
        if not path.resolve().is_relative_to(self._resolved_root):
            msg = f"Path escapes storage root: {'/'.join(segments)}"
            raise InvalidPathError(msg)
        return path

    def store(
        self,
        domain: str,
        category: str,
        data: bytes,
        content_type: str,
        extension: str,
    ) -> StoredBlob:
        """Write *data* under a freshly generated filename.

        *content_type* is informational only; reads re-derive it.
        """
        filename = generate_filename(extension)
        path = self._path(domain, category, filename)
        with self._lock.write():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                msg = f"Failed to create directory {path.parent}: {exc}"
                raise StorageError(msg) from exc
            try:
                write_bytes_atomic(path, data)
            except OSError as exc:
                msg = f"Failed to write file {path}: {exc}"
                raise StorageError(msg) from exc
        logger.info(
            "Stored %s/%s/%s (%d bytes, declared %s)",
            domain,
            category,
            filename,
            len(data),
            content_type or "unknown",
        )
        return StoredBlob(filename=filename, size=len(data))

    def get(self, domain: str, category: str, filename: str) -> BlobContent | None:
        """Return the blob's bytes and content type, or None if it does not exist."""
        path = self._path(domain, category, filename)
        with self._lock.read():
            try:
                data = path.read_bytes()
            except FileNotFoundError:
                return None
            except OSError as exc:
                if exc.errno in (errno.ENOTDIR, errno.EISDIR):
                    return None
                msg = f"Failed to read file {path}: {exc}"
                raise StorageError(msg) from exc
        return BlobContent(data=data, content_type=detect_content_type(filename, data))

    def delete(self, domain: str, category: str, filename: str) -> None:
        path = self._path(domain, category, filename)
        with self._lock.write():
            try:
                path.unlink()
            except (FileNotFoundError, NotADirectoryError) as exc:
                msg = f"File not found: {domain}/{category}/{filename}"
                raise NotFoundError(msg) from exc
            except OSError as exc:
                msg = f"Failed to delete file {path}: {exc}"
                raise StorageError(msg) from exc
        logger.info("Deleted %s/%s/%s", domain, category, filename)

    def list_files(self, domain: str, category: str) -> list[str]:
        """Regular files directly under ``domain/category``, sorted ascending."""
        directory = self._path(domain, category)
        with self._lock.read():
            try:
                entries = list(directory.iterdir())
            except (FileNotFoundError, NotADirectoryError):
                return []
            except OSError as exc:
                msg = f"Failed to read directory {directory}: {exc}"
                raise StorageError(msg) from exc
            names = [
                entry.name
                for entry in entries
                if entry.is_file() and not entry.name.startswith(TEMP_PREFIX)
            ]
        return sorted(names)
