"""Locate ``cdnctl.toml``.

An installation is the directory holding ``cdnctl.toml``: commands run
from any subdirectory of it (storage, configs, ...) act on the same
catalogs. ``CDNCTL_CONFIG`` pins the file explicitly and disables the
search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "cdnctl.toml"
CONFIG_ENV_VAR = "CDNCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: CWD), or None.

    A ``CDNCTL_CONFIG`` that names a missing file yields None rather than
    falling back to the search.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )
