"""Command group: manage CDN domains (public hosts)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnGroup

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext

_DOMAIN_EXAMPLES = """\
  cdnctl domain add main "Main CDN" https://cdn.example.com
  cdnctl domain list
  cdnctl --json domain remove main"""


@click.group(cls=CdnGroup, examples=_DOMAIN_EXAMPLES)
def domain() -> None:
    """Add, remove, and list domains."""


@domain.command(
    examples="""\
  cdnctl domain add main "Main CDN" cdn.example.com
  cdnctl domain add "media files" "Media" https://media.example.com/"""
)
@click.argument("folder_id")
@click.argument("display_name")
@click.argument("public_host")
@click.pass_obj
def add(app: AppContext, folder_id: str, display_name: str, public_host: str) -> None:
    """Register PUBLIC_HOST as a domain stored under FOLDER_ID.

    Spaces in FOLDER_ID become dashes; a protocol prefix and trailing
    slash are stripped from PUBLIC_HOST.
    """
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).add_domain(folder_id, display_name, public_host))


@domain.command(examples="  cdnctl domain remove main")
@click.argument("folder_id")
@click.pass_obj
def remove(app: AppContext, folder_id: str) -> None:
    """Remove a domain (its stored files are kept on disk)."""
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).remove_domain(folder_id))


@domain.command(name="list", examples="  cdnctl domain list\n  cdnctl -q domain list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered domains."""
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).list_domains())
