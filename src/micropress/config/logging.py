"""Logging setup for micropress.

Library modules log through ``logging.getLogger(__name__)``; structlog
renders those records on stderr, as colored console lines or, with
``--log-json``, one JSON object per line.

:func:`operation_context` binds the Micropub action and target URL for the
duration of a request, so every line a request logs carries them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PACKAGE_LOGGER = "micropress"

# Libraries whose debug chatter stays hidden even with --verbose.
_NOISY_LOGGERS = ("pluggy", "ruamel")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging through one structlog-formatted stderr handler.

    Args:
        verbose: Let micropress DEBUG records through; otherwise WARNING+.
        log_json: Render JSON lines instead of console lines.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

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
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def operation_context(op: str, url: str | None = None) -> Iterator[None]:
    """Tag log records emitted inside the block with ``op`` (and ``url``)."""
    fields = {"op": op} if url is None else {"op": op, "url": url}
    with structlog.contextvars.bound_contextvars(**fields):
        yield
