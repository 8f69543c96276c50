"""Tests for atomic file writes and JSON helpers."""

from __future__ import annotations

import json
import stat
from pathlib import Path

import pytest

from cdnctl.infrastructure.filesystem import TEMP_PREFIX, read_json, write_bytes_atomic, write_json


class TestWriteBytesAtomic:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "blob.bin"
        write_bytes_atomic(target, b"abc")
        assert target.read_bytes() == b"abc"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "blob.bin"
        target.write_bytes(b"old")
        write_bytes_atomic(target, b"new")
        assert target.read_bytes() == b"new"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        write_bytes_atomic(tmp_path / "blob.bin", b"abc")
        assert not [p for p in tmp_path.iterdir() if p.name.startswith(TEMP_PREFIX)]

    def test_world_readable(self, tmp_path: Path) -> None:
        target = tmp_path / "blob.bin"
        write_bytes_atomic(target, b"abc")
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_missing_parent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            write_bytes_atomic(tmp_path / "missing" / "blob.bin", b"abc")


class TestJson:
    def test_round_trip(self, tmp_path: Path) -> None:
        target = tmp_path / "configs" / "domains.json"
        write_json(target, [{"folder-name": "main"}])
        assert read_json(target) == [{"folder-name": "main"}]

    def test_indented_with_trailing_newline(self, tmp_path: Path) -> None:
        target = tmp_path / "x.json"
        write_json(target, {"a": 1})
        text = target.read_text(encoding="utf-8")
        assert text == json.dumps({"a": 1}, indent=2) + "\n"

    def test_non_ascii_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "x.json"
        write_json(target, {"name": "Bilder"})
        write_json(target, {"name": "Fotos ä"})
        assert "ä" in target.read_text(encoding="utf-8")

    def test_read_invalid_raises_value_error(self, tmp_path: Path) -> None:
        target = tmp_path / "x.json"
        target.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            read_json(target)
