"""Logging for pda.

Modules log through :func:`get_logger`, which wraps the stdlib logger of the
same name in a structlog bound logger. Events are rendered by structlog and
emitted by stdlib handlers, so nothing is written until a handler is
attached: as a library pda stays silent below WARNING, and the CLI attaches
a stderr handler through :func:`configure_logging`.
"""

from __future__ import annotations

import logging as std_logging

import structlog

LOGGER_NAME = "pda"

_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.dev.ConsoleRenderer(colors=False),
]


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by ``logging.getLogger(name)``."""
    return structlog.wrap_logger(
        std_logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a log level."""
    if verbosity <= 0:
        return std_logging.WARNING
    if verbosity == 1:
        return std_logging.INFO
    return std_logging.DEBUG


def configure_logging(verbosity: int = 0) -> None:
    """Send pda log events to stderr at the level chosen by ``verbosity``.

    Only the ``pda`` logger is touched; calling this again replaces the
    previous handler.
    """
    handler = std_logging.StreamHandler()
    handler.setFormatter(std_logging.Formatter("%(message)s"))

    logger = std_logging.getLogger(LOGGER_NAME)
    logger.handlers[:] = [handler]
    logger.setLevel(level_for_verbosity(verbosity))
    logger.propagate = False


def reset_logging() -> None:
    """Detach the handler installed by :func:`configure_logging`."""
    logger = std_logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(std_logging.NOTSET)
    logger.propagate = True
