"""FileService: upload, delete, and list stored files.

Upload target resolution, first match wins:

1. explicit ``domain`` / ``category`` arguments
2. the named ``binding``
3. the global default
4. (domain only) the first registered domain
"""

from __future__ import annotations

import math
from pathlib import Path, PurePosixPath
from typing import Any

from cdnctl.domain.errors import CdnError, NotFoundError, StorageError
from cdnctl.domain.paths import build_public_url, parse_public_url
from cdnctl.infrastructure.blobstore import detect_content_type
from cdnctl.infrastructure.download import fetch_remote
from cdnctl.services.base import BaseService
from cdnctl.services.result import NO_TARGET, ServiceResult

_REMOTE_SCHEMES = ("http://", "https://")


def is_remote(source: str) -> bool:
    return source.lower().startswith(_REMOTE_SCHEMES)


class FileService(BaseService):
    """Blob operations addressed the way administrators think of them."""

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def _resolve_target(
        self,
        op: str,
        domain: str | None,
        category: str | None,
        binding: str | None,
    ) -> tuple[str, str] | ServiceResult:
        bindings = self._depot.bindings
        bound = None
        if binding:
            bound = bindings.get_binding(binding)
            if bound is None:
                return self._fail(op, NotFoundError.code, f"No binding named '{binding}'")
        defaults = bindings.get_global_defaults()

        domain = domain or (bound.domain if bound else "") or defaults.domain
        if not domain:
            first = self._depot.registry.first_domain()
            domain = first.folder_id if first else ""
        category = category or (bound.category if bound else "") or defaults.category

        if not domain or not category:
            return self._fail(
                op,
                NO_TARGET,
                "Domain and category are required. Either pass them as options "
                "or set defaults with `cdnctl default set`.",
            )
        return domain, category

    def _read_source(self, source: str) -> tuple[bytes, str, str]:
        """Return ``(data, content_type, original_name)`` for a path or URL."""
        if is_remote(source):
            remote = fetch_remote(source, timeout=self._depot.settings.download.timeout)
            return remote.data, remote.content_type, remote.filename

        path = Path(source)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            msg = f"Source file not found: {source}"
            raise NotFoundError(msg) from exc
        except OSError as exc:
            msg = f"Failed to read source file {source}: {exc}"
            raise StorageError(msg) from exc
        return data, detect_content_type(path.name, data), path.name

    def upload(
        self,
        source: str,
        *,
        domain: str | None = None,
        category: str | None = None,
        binding: str | None = None,
    ) -> ServiceResult:
        """Store a local file or a downloaded URL and return its public URL."""
        op = "upload"
        registry = self._depot.registry
        if not registry.has_domains():
            return self._fail(
                op, NO_TARGET, "No domains configured. Add one with `cdnctl domain add`."
            )
        if not registry.has_categories():
            return self._fail(
                op, NO_TARGET, "No categories configured. Add one with `cdnctl category add`."
            )

        target = self._resolve_target(op, domain, category, binding)
        if isinstance(target, ServiceResult):
            return target
        domain, category = target

        host = registry.get_domain_host(domain)
        if host is None:
            return self._fail(op, NotFoundError.code, f"Invalid domain '{domain}'")
        if not registry.category_exists(category):
            return self._fail(op, NotFoundError.code, f"Invalid category '{category}'")

        try:
            data, content_type, original_name = self._read_source(source)
            extension = PurePosixPath(original_name).suffix
            stored = self._depot.blobs.store(domain, category, data, content_type, extension)
        except CdnError as exc:
            return self._error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "filename": stored.filename,
                "size": stored.size,
                "content_type": content_type,
                "domain": domain,
                "category": category,
                "url": build_public_url(host, category, stored.filename),
            },
        )

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, url: str) -> ServiceResult:
        """Delete the file behind a public URL (``[scheme://]host/category/filename``)."""
        op = "delete"
        try:
            location = parse_public_url(url)
        except CdnError as exc:
            return self._error(op, exc)

        domain = self._depot.registry.get_domain_by_host(location.host)
        if domain is None:
            return self._fail(
                op, NotFoundError.code, f"Domain '{location.host}' not found in configuration."
            )

        try:
            self._depot.blobs.delete(domain.folder_id, location.category, location.filename)
        except CdnError as exc:
            return self._error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "url": url,
                "domain": domain.folder_id,
                "category": location.category,
                "filename": location.filename,
            },
        )

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def list_files(self, domain: str, category: str, *, page: int = 1) -> ServiceResult:
        """One page of a category's files with their public URLs.

        Out-of-range pages are clamped to the nearest valid page.
        """
        op = "list_files"
        registry = self._depot.registry
        host = registry.get_domain_host(domain)
        if host is None:
            return self._fail(op, NotFoundError.code, f"Invalid domain '{domain}'")
        if not registry.category_exists(category):
            return self._fail(op, NotFoundError.code, f"Invalid category '{category}'")

        try:
            names = self._depot.blobs.list_files(domain, category)
        except CdnError as exc:
            return self._error(op, exc)

        per_page = self._depot.settings.listing.page_size
        pages = max(1, math.ceil(len(names) / per_page))
        page = min(max(page, 1), pages)
        start = (page - 1) * per_page
        items: list[dict[str, Any]] = [
            {"filename": name, "url": build_public_url(host, category, name)}
            for name in names[start : start + per_page]
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": domain,
                "category": category,
                "items": items,
                "count": len(items),
                "total": len(names),
                "page": page,
                "pages": pages,
            },
        )
