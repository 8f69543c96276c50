"""Command group: manage categories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnGroup

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext

_CATEGORY_EXAMPLES = """\
  cdnctl category add images "Images"
  cdnctl category list
  cdnctl category remove images"""


@click.group(cls=CdnGroup, examples=_CATEGORY_EXAMPLES)
def category() -> None:
    """Add, remove, and list categories."""


@category.command(examples='  cdnctl category add images "Images"')
@click.argument("folder_id")
@click.argument("display_name")
@click.pass_obj
def add(app: AppContext, folder_id: str, display_name: str) -> None:
    """Register a category stored under FOLDER_ID in every domain."""
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).add_category(folder_id, display_name))


@category.command(examples="  cdnctl category remove images")
@click.argument("folder_id")
@click.pass_obj
def remove(app: AppContext, folder_id: str) -> None:
    """Remove a category (its stored files are kept on disk)."""
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).remove_category(folder_id))


@category.command(name="list", examples="  cdnctl category list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered categories."""
    from cdnctl.services.catalog import CatalogService

    app.emit(CatalogService(app.depot).list_categories())
