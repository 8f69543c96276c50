"""Commands: upload, delete, and list stored files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnCommand

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext


@click.command(
    cls=CdnCommand,
    examples="""\
  cdnctl upload ./logo.png --domain main --category images
  cdnctl upload https://example.org/report.pdf --binding docs
  cdnctl -q upload ./photo.jpg""",
)
@click.argument("source")
@click.option("--domain", "domain_id", default=None, help="Target domain folder id.")
@click.option("--category", "category_id", default=None, help="Target category folder id.")
@click.option("--binding", default=None, help="Use a named binding for missing targets.")
@click.pass_obj
def upload(
    app: AppContext,
    source: str,
    domain_id: str | None,
    category_id: str | None,
    binding: str | None,
) -> None:
    """Store SOURCE (a local path or http(s) URL) and print its public URL."""
    from cdnctl.services.files import FileService

    app.emit(
        FileService(app.depot).upload(
            source,
            domain=domain_id,
            category=category_id,
            binding=binding,
        )
    )


@click.command(
    cls=CdnCommand,
    examples="""\
  cdnctl delete https://cdn.example.com/images/0b6f....png
  cdnctl delete cdn.example.com/images/0b6f....png""",
)
@click.argument("url")
@click.pass_obj
def delete(app: AppContext, url: str) -> None:
    """Delete the stored file behind a public URL."""
    from cdnctl.services.files import FileService

    app.emit(FileService(app.depot).delete(url))


@click.command(
    cls=CdnCommand,
    examples="""\
  cdnctl ls main images
  cdnctl ls main images --page 2
  cdnctl -q ls main images""",
)
@click.argument("domain_id")
@click.argument("category_id")
@click.option("--page", default=1, type=int, show_default=True, help="Page to show.")
@click.pass_obj
def ls(app: AppContext, domain_id: str, category_id: str, page: int) -> None:
    """List the files stored in DOMAIN_ID/CATEGORY_ID."""
    from cdnctl.services.files import FileService

    app.emit(FileService(app.depot).list_files(domain_id, category_id, page=page))
