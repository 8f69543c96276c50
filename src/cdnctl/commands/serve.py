"""serve: run the HTTP read path."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cdnctl.commands._base import CdnCommand

if TYPE_CHECKING:
    from cdnctl.commands._context import AppContext


@click.command(
    cls=CdnCommand,
    examples="""\
  # Serve on the configured address (default 0.0.0.0:8080)
  cdnctl serve

  # Custom bind address and worker count
  cdnctl serve --host 127.0.0.1 --port 9000 --threads 32

  # JSON access logs
  cdnctl --log-json serve""",
)
@click.option("--host", default=None, help="Bind address (default: from config).")
@click.option("--port", default=None, type=int, help="Listen port (default: from config).")
@click.option("--threads", default=None, type=int, help="Worker threads (default: from config).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None, threads: int | None) -> None:
    """Serve stored files for every registered domain over HTTP."""
    import logging

    from cdnctl.config.logging import configure_logging
    from cdnctl.server.wsgi import run_server

    settings = app.settings
    configure_logging(verbose=settings.verbose, log_json=settings.log_json, level=logging.INFO)

    depot = app.depot
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port
    click.echo(f"Starting CDN server on {bind_host}:{bind_port}", err=True)
    run_server(
        depot,
        host=bind_host,
        port=bind_port,
        threads=threads or settings.server.threads,
    )
    click.echo("CDN server stopped", err=True)
