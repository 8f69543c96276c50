"""CatalogService: add, remove, and list domains and categories.

Pipeline: VALIDATE → APPLY (memory) → PERSIST → RESPOND

A change that applied in memory but failed to persist is reported as an
``IO_ERROR`` whose message says so; the in-memory change is kept, and
the next successful save writes it out. A catalog whose file failed to
load is refused up front with ``PARSE_ERROR`` so its file is never
overwritten by the empty table.
"""

from __future__ import annotations

from typing import Any

from cdnctl.domain.errors import CdnError, NotFoundError, StorageError
from cdnctl.domain.models import Category, Domain
from cdnctl.infrastructure.depot import CATEGORIES, DOMAINS
from cdnctl.services.base import BaseService
from cdnctl.services.result import IN_USE, ServiceResult


def _domain_payload(domain: Domain) -> dict[str, Any]:
    return {
        "folder_id": domain.folder_id,
        "display_name": domain.display_name,
        "public_host": domain.public_host,
    }


def _category_payload(category: Category) -> dict[str, Any]:
    return {"folder_id": category.folder_id, "display_name": category.display_name}


class CatalogService(BaseService):
    """Administrative operations on the domain/category registry."""

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def add_domain(self, folder_id: str, display_name: str, public_host: str) -> ServiceResult:
        op = "add_domain"
        try:
            self._depot.require_loaded(DOMAINS)
            domain = self._depot.registry.add_domain(folder_id, display_name, public_host)
        except CdnError as exc:
            return self._error(op, exc)

        try:
            self._depot.save_domains()
        except StorageError as exc:
            return self._fail(
                op,
                exc.code,
                f"Domain added to memory but failed to save to file: {exc}",
                detail=_domain_payload(domain),
            )
        return ServiceResult(ok=True, op=op, data=_domain_payload(domain))

    def remove_domain(self, folder_id: str) -> ServiceResult:
        """Remove a domain unless a binding still targets it.

        Files stored under the domain stay on disk.
        """
        op = "remove_domain"
        try:
            self._depot.require_loaded(DOMAINS)
        except CdnError as exc:
            return self._error(op, exc)
        registry = self._depot.registry
        if not registry.has_domains():
            return self._fail(
                op, NotFoundError.code, "No domains exist. Add one with `cdnctl domain add`."
            )
        if not registry.domain_exists(folder_id):
            return self._fail(op, NotFoundError.code, f"Domain '{folder_id}' not found.")

        refs = self._depot.bindings.references_domain(folder_id)
        if refs:
            return self._fail(
                op,
                IN_USE,
                f"Cannot remove domain '{folder_id}' - it is used by: {', '.join(refs)}",
                detail={"bindings": refs},
            )

        try:
            domain = registry.remove_domain(folder_id)
        except CdnError as exc:
            return self._error(op, exc)

        try:
            self._depot.save_domains()
        except StorageError as exc:
            return self._fail(
                op,
                exc.code,
                f"Domain removed from memory but failed to save to file: {exc}",
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=_domain_payload(domain),
            warnings=[f"Stored files under '{folder_id}/' were left on disk"],
        )

    def list_domains(self) -> ServiceResult:
        items = [_domain_payload(d) for d in self._depot.registry.list_domains()]
        return ServiceResult(ok=True, op="list_domains", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, folder_id: str, display_name: str) -> ServiceResult:
        op = "add_category"
        try:
            self._depot.require_loaded(CATEGORIES)
            category = self._depot.registry.add_category(folder_id, display_name)
        except CdnError as exc:
            return self._error(op, exc)

        try:
            self._depot.save_categories()
        except StorageError as exc:
            return self._fail(
                op,
                exc.code,
                f"Category added to memory but failed to save to file: {exc}",
                detail=_category_payload(category),
            )
        return ServiceResult(ok=True, op=op, data=_category_payload(category))

    def remove_category(self, folder_id: str) -> ServiceResult:
        op = "remove_category"
        try:
            self._depot.require_loaded(CATEGORIES)
        except CdnError as exc:
            return self._error(op, exc)
        registry = self._depot.registry
        if not registry.has_categories():
            return self._fail(
                op, NotFoundError.code, "No categories exist. Add one with `cdnctl category add`."
            )
        if not registry.category_exists(folder_id):
            return self._fail(op, NotFoundError.code, f"Category '{folder_id}' not found.")

        refs = self._depot.bindings.references_category(folder_id)
        if refs:
            return self._fail(
                op,
                IN_USE,
                f"Cannot remove category '{folder_id}' - it is used by: {', '.join(refs)}",
                detail={"bindings": refs},
            )

        try:
            category = registry.remove_category(folder_id)
        except CdnError as exc:
            return self._error(op, exc)

        try:
            self._depot.save_categories()
        except StorageError as exc:
            return self._fail(
                op,
                exc.code,
                f"Category removed from memory but failed to save to file: {exc}",
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=_category_payload(category),
            warnings=[f"Stored files in '{folder_id}/' folders were left on disk"],
        )

    def list_categories(self) -> ServiceResult:
        items = [_category_payload(c) for c in self._depot.registry.list_categories()]
        return ServiceResult(
            ok=True, op="list_categories", data={"items": items, "count": len(items)}
        )
