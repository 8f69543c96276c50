"""Tests for blob naming and ETag derivation."""

from __future__ import annotations

import hashlib
import re
import uuid

from cdnctl.domain.blobs import compute_etag, generate_filename


class TestGenerateFilename:
    def test_uuid_plus_extension(self) -> None:
        name = generate_filename(".png")
        stem, ext = name[:-4], name[-4:]
        assert ext == ".png"
        assert uuid.UUID(stem).version == 4

    def test_empty_extension(self) -> None:
        name = generate_filename("")
        assert uuid.UUID(name).version == 4

    def test_extension_not_modified(self) -> None:
        assert generate_filename(".TAR.GZ").endswith(".TAR.GZ")

    def test_unique(self) -> None:
        names = {generate_filename(".txt") for _ in range(200)}
        assert len(names) == 200


class TestComputeEtag:
    def test_format(self) -> None:
        etag = compute_etag(b"hello")
        assert re.fullmatch(r'"[0-9a-f]{16}"', etag)

    def test_matches_sha256_prefix(self) -> None:
        expected = hashlib.sha256(b"hello").hexdigest()[:16]
        assert compute_etag(b"hello") == f'"{expected}"'

    def test_content_only(self) -> None:
        assert compute_etag(b"same") == compute_etag(b"same")
        assert compute_etag(b"same") != compute_etag(b"other")

    def test_empty_body(self) -> None:
        assert compute_etag(b"") == f'"{hashlib.sha256(b"").hexdigest()[:16]}"'
