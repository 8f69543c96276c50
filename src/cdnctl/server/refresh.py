"""Catalog refresher: pick up catalog edits made by other processes.

Administrative commands run in their own process and save the catalog
files; a running server notices the new modification time and reloads.
A failed reload keeps the previous table.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from cdnctl.domain.errors import CdnError
from cdnctl.infrastructure.depot import CATEGORIES, DOMAINS

if TYPE_CHECKING:
    from pathlib import Path

    from cdnctl.infrastructure.depot import Depot

logger = logging.getLogger(__name__)


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


class CatalogRefresher:
    """Poll the catalog files every *interval* seconds on a daemon thread."""

    def __init__(self, depot: Depot, interval: float) -> None:
        self._depot = depot
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._seen = {
            depot.domains_path: _mtime(depot.domains_path),
            depot.categories_path: _mtime(depot.categories_path),
        }

    def check(self) -> list[Path]:
        """Reload every catalog file whose mtime changed; return those paths."""
        kinds = {self._depot.domains_path: DOMAINS, self._depot.categories_path: CATEGORIES}
        reloaded: list[Path] = []
        for path, kind in kinds.items():
            current = _mtime(path)
            if current is None or current == self._seen.get(path):
                continue
            self._seen[path] = current
            try:
                self._depot.load(kind)
            except CdnError as exc:
                logger.warning("Catalog reload failed, keeping previous table: %s", exc)
                continue
            reloaded.append(path)
        return reloaded

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.check()

    def start(self) -> None:
        if self._interval <= 0 or self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="catalog-refresh", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self._interval + 1)
            self._thread = None
