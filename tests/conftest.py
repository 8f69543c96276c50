"""Shared pytest fixtures and test helpers for cdnctl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cdnctl.config.settings import CdnSettings
from cdnctl.infrastructure.depot import Depot

# Smallest valid PNG: signature + IHDR + IDAT + IEND for a 1x1 image.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CDNCTL_* environment out of the tests."""
    monkeypatch.delenv("CDNCTL_CONFIG", raising=False)
    monkeypatch.delenv("CDNCTL_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def depot_root(tmp_path: Path) -> Path:
    """Temporary installation root.

    This is the single source of truth for the on-disk layout. All
    depot-related fixtures (depot, _isolated_depot) build on this.
    """
    return tmp_path


@pytest.fixture
def settings(depot_root: Path) -> CdnSettings:
    return CdnSettings.from_cli(root=depot_root)


@pytest.fixture
def depot(settings: CdnSettings) -> Depot:
    """A depot over empty catalog files in a temp directory."""
    return Depot(settings)


@pytest.fixture
def _isolated_depot(depot_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp root so the CLI creates an isolated depot.

    Use via ``@pytest.mark.usefixtures("_isolated_depot")`` on command test
    classes. Tests that need the path can also request ``tmp_path`` directly
    (pytest deduplicates, it's the same directory).
    """
    monkeypatch.chdir(depot_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def add_domain(
    depot: Depot,
    folder_id: str = "main",
    display_name: str = "Main CDN",
    public_host: str = "cdn.example.com",
) -> dict[str, Any]:
    """Add a domain via CatalogService, asserting success."""
    from cdnctl.services.catalog import CatalogService

    result = CatalogService(depot).add_domain(folder_id, display_name, public_host)
    assert result.ok, result.error
    return result.data


def add_category(
    depot: Depot, folder_id: str = "images", display_name: str = "Images"
) -> dict[str, Any]:
    """Add a category via CatalogService, asserting success."""
    from cdnctl.services.catalog import CatalogService

    result = CatalogService(depot).add_category(folder_id, display_name)
    assert result.ok, result.error
    return result.data


def upload_bytes(
    depot: Depot,
    tmp_path: Path,
    data: bytes,
    name: str = "file.png",
    **kwargs: Any,
) -> dict[str, Any]:
    """Write *data* to a local file and upload it, asserting success."""
    from cdnctl.services.files import FileService

    source = tmp_path / "sources" / name
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_bytes(data)
    result = FileService(depot).upload(str(source), **kwargs)
    assert result.ok, result.error
    return result.data
