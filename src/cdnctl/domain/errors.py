"""Error taxonomy shared by every layer.

Infrastructure raises these; services translate them into
:class:`~cdnctl.services.result.ServiceError` codes; the HTTP read path
collapses all of them into a uniform 404.
"""

from __future__ import annotations


class CdnError(Exception):
    """Base class for all cdnctl errors."""

    code = "ERROR"


class NotFoundError(CdnError):
    """A domain, category, blob, binding or host does not exist."""

    code = "NOT_FOUND"


class CatalogMissingError(NotFoundError):
    """A persisted catalog file does not exist yet (start empty)."""


class AlreadyExistsError(CdnError):
    """Duplicate add of a domain, category, or public host."""

    code = "ALREADY_EXISTS"


class InvalidInputError(CdnError):
    """Caller-supplied identifier violates a naming rule."""

    code = "INVALID_INPUT"


class InvalidPathError(InvalidInputError):
    """A path segment would escape its directory (``..``, separators, NUL)."""


class StorageError(CdnError):
    """Disk read/write failure."""

    code = "IO_ERROR"


class CatalogParseError(CdnError):
    """A persisted catalog or binding file is malformed."""

    code = "PARSE_ERROR"


class DownloadError(CdnError):
    """Fetching a remote file failed."""

    code = "DOWNLOAD_FAILED"
