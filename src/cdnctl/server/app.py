"""WSGI request handler for ``GET|HEAD|OPTIONS /{category}/{filename}``.

Every failure (unknown host, malformed path, unsupported method, missing
blob, I/O fault) produces the same short-lived 404 so untrusted clients
learn nothing about internal state. Unsupported methods answer 404, not
405.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import structlog

from cdnctl.domain.blobs import compute_etag

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from cdnctl.server.resolver import Resolver

logger = structlog.get_logger(__name__)

IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"
NOT_FOUND_CACHE_CONTROL = "public, max-age=60"
CORS_ALLOW_METHODS = "GET, HEAD, OPTIONS"
CORS_MAX_AGE = "86400"
NOT_FOUND_BODY = b"404 page not found\n"


def _status(code: HTTPStatus) -> str:
    return f"{code.value} {code.phrase}"


def _request_path(environ: dict[str, Any]) -> str:
    """PATH_INFO decoded as UTF-8 (WSGI hands it over as latin-1)."""
    raw = environ.get("PATH_INFO", "")
    try:
        return raw.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return raw


def _split_path(path: str) -> tuple[str, str] | None:
    parts = path.removeprefix("/").split("/", 1)
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


class CdnApp:
    """WSGI application serving stored blobs for registered hosts."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        host = environ.get("HTTP_HOST") or environ.get("SERVER_NAME", "")
        path = _request_path(environ)
        log = logger.bind(method=method, host=host, path=path)

        domain = self._resolver.resolve_host(host)
        if domain is None:
            log.debug("request.unknown_host")
            return self._not_found(method, start_response)

        split = _split_path(path)
        if split is None:
            log.debug("request.malformed_path")
            return self._not_found(method, start_response)
        category, filename = split

        if method == "OPTIONS":
            start_response(
                _status(HTTPStatus.OK),
                [
                    ("Access-Control-Allow-Origin", "*"),
                    ("Access-Control-Allow-Methods", CORS_ALLOW_METHODS),
                    ("Access-Control-Max-Age", CORS_MAX_AGE),
                    ("Content-Length", "0"),
                ],
            )
            return [b""]

        if method not in ("GET", "HEAD"):
            log.debug("request.unsupported_method")
            return self._not_found(method, start_response)

        blob = self._resolver.fetch(domain.folder_id, category, filename)
        if blob is None:
            log.debug("request.blob_missing", domain=domain.folder_id)
            return self._not_found(method, start_response)

        etag = compute_etag(blob.data)
        if environ.get("HTTP_IF_NONE_MATCH") == etag:
            log.debug("request.not_modified", etag=etag)
            start_response(_status(HTTPStatus.NOT_MODIFIED), [("ETag", etag)])
            return [b""]

        headers = [
            ("Content-Type", blob.content_type),
            ("ETag", etag),
            ("Cache-Control", IMMUTABLE_CACHE_CONTROL),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(blob.data))),
        ]
        origin = environ.get("HTTP_ORIGIN")
        if origin:
            headers.append(("Access-Control-Allow-Origin", origin))

        start_response(_status(HTTPStatus.OK), headers)
        log.info("request.served", domain=domain.folder_id, size=len(blob.data))
        if method == "HEAD":
            return [b""]
        return [blob.data]

    @staticmethod
    def _not_found(method: str, start_response: Callable[..., Any]) -> Iterable[bytes]:
        start_response(
            _status(HTTPStatus.NOT_FOUND),
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Cache-Control", NOT_FOUND_CACHE_CONTROL),
                ("X-Content-Type-Options", "nosniff"),
                ("Content-Length", str(len(NOT_FOUND_BODY))),
            ],
        )
        if method == "HEAD":
            return [b""]
        return [NOT_FOUND_BODY]
