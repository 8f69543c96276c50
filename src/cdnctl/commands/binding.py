"""Command group: named upload bindings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnGroup

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext

_BINDING_EXAMPLES = """\
  cdnctl binding set screenshots main images
  cdnctl upload ./shot.png --binding screenshots
  cdnctl binding list
  cdnctl binding remove screenshots"""


@click.group(cls=CdnGroup, examples=_BINDING_EXAMPLES)
def binding() -> None:
    """Manage named domain/category bindings."""


@binding.command(name="set", examples="  cdnctl binding set screenshots main images")
@click.argument("name")
@click.argument("domain_id")
@click.argument("category_id")
@click.pass_obj
def set_cmd(app: AppContext, name: str, domain_id: str, category_id: str) -> None:
    """Bind NAME to DOMAIN_ID/CATEGORY_ID."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).set_binding(name, domain_id, category_id))


@binding.command(examples="  cdnctl binding show screenshots")
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one binding."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).show_binding(name))


@binding.command(examples="  cdnctl binding remove screenshots")
@click.argument("name")
@click.pass_obj
def remove(app: AppContext, name: str) -> None:
    """Remove a binding."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).remove_binding(name))


@binding.command(name="list", examples="  cdnctl binding list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all bindings."""
    from cdnctl.services.bindings import BindingService

    app.emit(BindingService(app.depot).list_bindings())
