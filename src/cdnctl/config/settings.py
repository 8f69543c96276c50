"""CdnSettings: CLI flags, ``CDNCTL_*`` env vars and ``cdnctl.toml`` merged.

Earlier sources win::

    CLI flags  >  CDNCTL_SERVER__PORT=9000  >  [server] port = 9000  >  defaults

The installation root is the directory holding ``cdnctl.toml`` (or the
CWD without one); relative ``[storage]`` and ``[catalog]`` paths hang
off it.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, InitSettingsSource, PydanticBaseSettingsSource

from cdnctl.config.discovery import find_config
from cdnctl.config.models import (
    CatalogConfig,
    DownloadConfig,
    ListingConfig,
    ServerConfig,
    StorageConfig,
)

# Parsed TOML for the settings object currently being built by from_cli.
_toml_data: ContextVar[dict[str, Any]] = ContextVar("cdnctl_toml_data")


def load_toml(path: Path | None) -> dict[str, Any]:
    """Parse *path*; a missing path is an empty table."""
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class CdnSettings(BaseSettings):
    """Settings shared by every command and the server.

    Attributes:
        root: Base directory for relative paths.
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CDNCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    storage: StorageConfig = Field(default_factory=StorageConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_source = InitSettingsSource(settings_cls, _toml_data.get({}))
        return init_settings, env_settings, toml_source

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> CdnSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored, as is
        an unset one when no ``cdnctl.toml`` is found walking up from
        *root* (or the CWD).
        """
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_data.set(load_toml(toml_path))
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _toml_data.reset(token)

    def resolve(self, path: str) -> Path:
        """Resolve *path* against :attr:`root` unless it is absolute."""
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.root / p

    @property
    def storage_path(self) -> Path:
        return self.resolve(self.storage.path)

    @property
    def domains_path(self) -> Path:
        return self.resolve(self.catalog.domains_file)

    @property
    def categories_path(self) -> Path:
        return self.resolve(self.catalog.categories_file)

    @property
    def bindings_path(self) -> Path:
        return self.resolve(self.catalog.bindings_file)
