"""Filesystem helpers shared by the catalog, binding, and blob stores.

INVARIANT: Files are replaced, never rewritten in place. Every write
goes to a hidden temp file in the target directory and is renamed over
the destination, so readers see either the old or the new content.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

# Prefix of in-flight temp files; listings skip names starting with it.
TEMP_PREFIX = ".tmp-"


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write *data* to *path* via temp file + rename.

    Parent directories must already exist.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Any:
    """Read and decode a JSON document.

    Raises ``FileNotFoundError``/``OSError`` for read faults and
    ``ValueError`` for undecodable content; callers map both.
    """
    raw = path.read_text(encoding="utf-8")
    return json.loads(raw)


def write_json(path: Path, payload: Any) -> None:
    """Encode *payload* as indented JSON and write it atomically.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    write_bytes_atomic(path, rendered.encode("utf-8"))
