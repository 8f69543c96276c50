"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cdnctl.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- cdnctl.toml sections ---


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    path: str = "storage"


class CatalogConfig(BaseModel):
    """[catalog] section: locations of the persisted JSON files."""

    model_config = {"frozen": True}

    domains_file: str = "configs/domains.json"
    categories_file: str = "configs/categories.json"
    bindings_file: str = "configs/settings.json"


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    threads: int = Field(default=10, ge=1)
    refresh_interval: float = Field(default=5.0, ge=0)
    server_name: str = "cdnctl"


class DownloadConfig(BaseModel):
    """[download] section."""

    model_config = {"frozen": True}

    timeout: float = 30.0


class ListingConfig(BaseModel):
    """[listing] section."""

    model_config = {"frozen": True}

    page_size: int = Field(default=15, ge=1)
