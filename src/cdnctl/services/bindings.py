"""BindingService: global default and named upload targets."""

from __future__ import annotations

from cdnctl.domain.errors import CdnError, InvalidInputError, NotFoundError
from cdnctl.services.base import BaseService
from cdnctl.services.result import ServiceResult


class BindingService(BaseService):
    """Manage where uploads go when a command names no target."""

    def _check_target(self, op: str, domain: str, category: str) -> ServiceResult | None:
        registry = self._depot.registry
        if not registry.domain_exists(domain):
            return self._fail(op, NotFoundError.code, f"Invalid domain '{domain}'")
        if not registry.category_exists(category):
            return self._fail(op, NotFoundError.code, f"Invalid category '{category}'")
        return None

    def set_default(self, domain: str, category: str) -> ServiceResult:
        op = "set_default"
        failure = self._check_target(op, domain, category)
        if failure is not None:
            return failure
        try:
            self._depot.bindings.set_global_defaults(domain, category)
        except CdnError as exc:
            return self._error(op, exc)
        return ServiceResult(ok=True, op=op, data={"domain": domain, "category": category})

    def show_default(self) -> ServiceResult:
        defaults = self._depot.bindings.get_global_defaults()
        warnings = [] if defaults.complete else ["No global default is set"]
        return ServiceResult(
            ok=True,
            op="show_default",
            data={"domain": defaults.domain, "category": defaults.category},
            warnings=warnings,
        )

    def set_binding(self, name: str, domain: str, category: str) -> ServiceResult:
        op = "set_binding"
        if not name.strip():
            return self._fail(op, InvalidInputError.code, "Binding name must not be empty")
        failure = self._check_target(op, domain, category)
        if failure is not None:
            return failure
        try:
            self._depot.bindings.set_binding(name, domain, category)
        except CdnError as exc:
            return self._error(op, exc)
        return ServiceResult(
            ok=True, op=op, data={"name": name, "domain": domain, "category": category}
        )

    def show_binding(self, name: str) -> ServiceResult:
        op = "show_binding"
        binding = self._depot.bindings.get_binding(name)
        if binding is None:
            return self._fail(op, NotFoundError.code, f"No binding named '{name}'")
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "domain": binding.domain, "category": binding.category},
        )

    def remove_binding(self, name: str) -> ServiceResult:
        op = "remove_binding"
        try:
            self._depot.bindings.remove_binding(name)
        except CdnError as exc:
            return self._error(op, exc)
        return ServiceResult(ok=True, op=op, data={"name": name})

    def list_bindings(self) -> ServiceResult:
        items = [
            {"name": name, "domain": b.domain, "category": b.category}
            for name, b in sorted(self._depot.bindings.list_bindings().items())
        ]
        return ServiceResult(
            ok=True, op="list_bindings", data={"items": items, "count": len(items)}
        )
