"""structlog configuration for coverscout.

One processor chain, two renderers: JSON lines when ``APP_ENV=production``
(or ``json_output=True``), a console renderer everywhere else.  Colours are
only used when the target stream is a terminal.

stdlib ``logging`` (uvicorn, httpx) is routed through the same chain.  httpx
and httpcore are held at WARNING or above because the fetcher already logs
every proxy attempt.

Logs go to stdout unless a ``stream`` is given.  The CLI passes stderr so the
JSON envelope it prints on stdout stays parseable.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

from coverscout.utils.errors import ConfigurationError

_QUIET_LIBRARIES = ("httpx", "httpcore")


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {log_level!r}")
    return level


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer(json_output: bool, out: TextIO) -> structlog.types.Processor:
    if json_output or os.environ.get("APP_ENV", "development") == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=out.isatty())


def _route_stdlib(
    out: TextIO,
    processors: list[structlog.types.Processor],
    renderer: structlog.types.Processor,
    level: int,
) -> None:
    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Point structlog and stdlib logging at *stream* with one shared format.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive).
        json_output: Force the JSON renderer regardless of ``APP_ENV``.
        stream: Destination for every log line; defaults to ``sys.stdout``.

    Raises:
        ConfigurationError: If *log_level* is not a known level name.
    """
    level = _resolve_level(log_level)
    out = stream or sys.stdout
    processors = _shared_processors()
    renderer = _select_renderer(json_output, out)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(out, processors, renderer, level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger bound to ``logger_name=name``, configuring defaults if needed."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
