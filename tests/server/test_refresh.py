"""Tests for picking up catalog edits made by other processes."""

from __future__ import annotations

import json
import os
from pathlib import Path

from cdnctl.infrastructure.depot import Depot
from cdnctl.server.refresh import CatalogRefresher


def _bump_mtime(path: Path) -> None:
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 10))


class TestCatalogRefresher:
    def test_no_change_no_reload(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0)
        assert refresher.check() == []

    def test_reloads_changed_domains(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0)
        depot.domains_path.write_text(
            json.dumps([{"folder-name": "main", "domain-fqdn": "cdn.example.com"}])
        )
        _bump_mtime(depot.domains_path)

        assert refresher.check() == [depot.domains_path]
        assert depot.registry.get_domain_by_host("cdn.example.com") is not None
        assert refresher.check() == []

    def test_reloads_changed_categories(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0)
        depot.categories_path.write_text(json.dumps([{"folder-name": "images"}]))
        _bump_mtime(depot.categories_path)

        assert refresher.check() == [depot.categories_path]
        assert depot.registry.category_exists("images")

    def test_bad_file_keeps_previous_table(self, depot: Depot) -> None:
        depot.registry.add_domain("main", "Main", "cdn.example.com")
        refresher = CatalogRefresher(depot, interval=0)
        depot.domains_path.write_text("[broken")
        _bump_mtime(depot.domains_path)

        assert refresher.check() == []
        assert depot.registry.domain_exists("main")

    def test_missing_file_ignored(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0)
        depot.domains_path.unlink()
        assert refresher.check() == []

    def test_start_stop(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0.01)
        refresher.start()
        refresher.stop()

    def test_zero_interval_never_starts(self, depot: Depot) -> None:
        refresher = CatalogRefresher(depot, interval=0)
        refresher.start()
        refresher.stop()

    def test_fixed_file_reenables_saves(self, depot: Depot) -> None:
        depot.domains_path.write_text("[broken")
        depot.load_catalogs()
        refresher = CatalogRefresher(depot, interval=0)
        depot.domains_path.write_text(json.dumps([{"folder-name": "main", "domain-fqdn": "a.com"}]))
        _bump_mtime(depot.domains_path)

        assert refresher.check() == [depot.domains_path]
        depot.save_domains()
        assert json.loads(depot.domains_path.read_text())[0]["folder-name"] == "main"
