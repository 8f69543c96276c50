"""Remote fetch: download a file by URL for upload.

A plain HTTP GET. Redirects are followed; anything but a final 200 is a
:class:`DownloadError`.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import NamedTuple
from urllib.parse import unquote, urlsplit

import httpx

from cdnctl.domain.errors import DownloadError
from cdnctl.infrastructure.blobstore import detect_content_type

logger = logging.getLogger(__name__)


class RemoteFile(NamedTuple):
    data: bytes
    content_type: str
    filename: str


def filename_from_url(url: str) -> str:
    """Last path segment of *url*, percent-decoded (may be empty)."""
    return PurePosixPath(unquote(urlsplit(url).path)).name


def fetch_remote(
    url: str,
    *,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> RemoteFile:
    """GET *url* and return its body, bare content type, and filename.

    Args:
        url: Absolute ``http``/``https`` URL.
        timeout: Seconds before connect/read gives up.
        transport: Optional transport override (tests use ``httpx.MockTransport``).
    """
    logger.info("Downloading %s", url)
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        msg = f"Failed to download file: {exc}"
        raise DownloadError(msg) from exc

    if response.status_code != httpx.codes.OK:
        msg = f"Download failed with status: {response.status_code}"
        raise DownloadError(msg)

    data = response.content
    filename = filename_from_url(str(response.url))
    content_type = response.headers.get("content-type", "").split(";", 1)[0].strip()
    if not content_type:
        content_type = detect_content_type(filename, data)
    return RemoteFile(data=data, content_type=content_type, filename=filename)
