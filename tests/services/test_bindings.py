"""Tests for BindingService: global default and named bindings."""

from __future__ import annotations

import pytest

from cdnctl.infrastructure.depot import Depot
from cdnctl.services.bindings import BindingService
from tests.conftest import add_category, add_domain


@pytest.fixture
def ready(depot: Depot) -> Depot:
    add_domain(depot)
    add_category(depot)
    return depot


class TestDefault:
    def test_set_and_show(self, ready: Depot) -> None:
        svc = BindingService(ready)
        assert svc.set_default("main", "images").ok
        result = svc.show_default()
        assert result.data == {"domain": "main", "category": "images"}
        assert result.warnings == []

    def test_show_unset_warns(self, ready: Depot) -> None:
        result = BindingService(ready).show_default()
        assert result.ok
        assert result.warnings == ["No global default is set"]

    def test_set_invalid_domain(self, ready: Depot) -> None:
        result = BindingService(ready).set_default("ghost", "images")
        assert result.error.code == "NOT_FOUND"
        assert not ready.bindings.has_global_defaults()

    def test_set_invalid_category(self, ready: Depot) -> None:
        result = BindingService(ready).set_default("main", "ghost")
        assert "Invalid category" in result.error.message


class TestNamedBindings:
    def test_set_show_remove(self, ready: Depot) -> None:
        svc = BindingService(ready)
        assert svc.set_binding("chat", "main", "images").ok
        shown = svc.show_binding("chat")
        assert shown.data == {"name": "chat", "domain": "main", "category": "images"}
        assert svc.remove_binding("chat").ok
        assert svc.show_binding("chat").error.code == "NOT_FOUND"

    def test_empty_name(self, ready: Depot) -> None:
        result = BindingService(ready).set_binding("  ", "main", "images")
        assert result.error.code == "INVALID_INPUT"

    def test_remove_missing(self, ready: Depot) -> None:
        assert BindingService(ready).remove_binding("ghost").error.code == "NOT_FOUND"

    def test_list_sorted(self, ready: Depot) -> None:
        svc = BindingService(ready)
        svc.set_binding("zeta", "main", "images")
        svc.set_binding("alpha", "main", "images")
        result = svc.list_bindings()
        assert [i["name"] for i in result.data["items"]] == ["alpha", "zeta"]
        assert result.data["count"] == 2
