"""WSGI application factory and cheroot server runner."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cheroot.wsgi import Server as WSGIServer

from cdnctl.server.app import CdnApp
from cdnctl.server.refresh import CatalogRefresher
from cdnctl.server.resolver import Resolver

if TYPE_CHECKING:
    from cdnctl.infrastructure.depot import Depot

logger = logging.getLogger(__name__)


def create_app(depot: Depot) -> CdnApp:
    """Create the read-path WSGI application over *depot*."""
    return CdnApp(Resolver(depot.registry, depot.blobs))


def create_server(
    depot: Depot,
    *,
    host: str,
    port: int,
    threads: int,
) -> WSGIServer:
    """Create a cheroot server with one worker thread per in-flight request."""
    server = WSGIServer(
        bind_addr=(host, port),
        wsgi_app=create_app(depot),
        numthreads=threads,
    )
    server.server_name = depot.settings.server.server_name
    return server


def run_server(depot: Depot, *, host: str, port: int, threads: int) -> None:
    """Serve until interrupted, refreshing catalogs in the background."""
    server = create_server(depot, host=host, port=port, threads=threads)
    refresher = CatalogRefresher(depot, depot.settings.server.refresh_interval)
    refresher.start()
    try:
        logger.info("CDN server starting on %s:%d", host, port)
        server.start()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.stop()
        refresher.stop()
