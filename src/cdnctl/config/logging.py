"""Log routing for the CLI and the server.

Everything goes to stderr so stdout stays clean for results and piped
URLs. Stdlib loggers (``logging.getLogger(__name__)``) and structlog
loggers share one processor chain, so both render the same way: a
console line by default, a JSON object per line with ``--log-json``.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Chatty third-party loggers held at WARNING regardless of -v.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: int | None = None,
) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        verbose: ``cdnctl`` loggers at DEBUG; otherwise WARNING.
        log_json: JSON lines instead of console lines.
        level: ``cdnctl`` level when not verbose. ``serve`` passes INFO
            so request events show up.
    """
    if verbose:
        cdn_level = logging.DEBUG
    elif level is not None:
        cdn_level = level
    else:
        cdn_level = logging.WARNING

    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("cdnctl").setLevel(cdn_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
