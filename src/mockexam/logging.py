"""Logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

_SHARED_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(verbose: bool = False) -> None:
    """Send structlog events to stderr through the standard library.

    Args:
        verbose: If True, show DEBUG level logs. Otherwise only warnings and
            errors are shown so they do not interleave with the quiz prompts.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    stream = sys.stderr

    # force: every CLI invocation rebinds to the current stderr
    logging.basicConfig(format="%(message)s", stream=stream, level=level, force=True)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.dev.ConsoleRenderer(colors=stream.isatty()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
