"""Command group: the global default upload target."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnGroup

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext


@click.group(cls=CdnGroup, examples="  cdnctl default set main images\n  cdnctl default show")
def default() -> None:
    """Set or show the global default domain and category."""


@default.command(name="set", examples="  cdnctl default set main images")
@click.argument("domain_id")
@click.argument("category_id")
@click.pass_obj
def set_cmd(app: AppContext, domain_id: str, category_id: str) -> None:
    """Use DOMAIN_ID/CATEGORY_ID when an upload names no target."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).set_default(domain_id, category_id))


@default.command(examples="  cdnctl default show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the global default."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).show_default())
