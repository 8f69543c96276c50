"""Catalog records and the normalization rules applied on add and load.

Field aliases match the on-disk JSON records (``folder-name``,
``display-name``, ``domain-fqdn``) so files written by earlier releases
load unchanged.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

_PROTOCOL_PREFIXES = ("https://", "http://", "ftp://")
_WHITESPACE = re.compile(r"\s")


def normalize_folder_id(folder_id: str) -> str:
    """Replace spaces with dashes, keeping case.

    >>> normalize_folder_id("My Images")
    'My-Images'
    """
    return folder_id.replace(" ", "-")


def is_valid_folder_id(folder_id: str) -> bool:
    """A folder id is non-empty and contains no whitespace."""
    return bool(folder_id) and _WHITESPACE.search(folder_id) is None


def strip_protocol(host: str) -> str:
    """Strip one protocol prefix and a trailing slash from a public host.

    >>> strip_protocol("https://cdn.example.com/")
    'cdn.example.com'
    """
    for prefix in _PROTOCOL_PREFIXES:
        if host.startswith(prefix):
            host = host[len(prefix) :]
            break
    return host.removesuffix("/")


class Domain(BaseModel):
    """A public hostname mapped to a storage folder."""

    model_config = {"frozen": True, "populate_by_name": True}

    folder_id: str = Field(alias="folder-name")
    display_name: str = Field(default="", alias="display-name")
    public_host: str = Field(default="", alias="domain-fqdn")


class Category(BaseModel):
    """A named subdivision inside every domain's storage tree."""

    model_config = {"frozen": True, "populate_by_name": True}

    folder_id: str = Field(alias="folder-name")
    display_name: str = Field(default="", alias="display-name")


class Binding(BaseModel):
    """Upload target used when a command names no domain or category."""

    model_config = {"frozen": True}

    domain: str = ""
    category: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.domain and self.category)
