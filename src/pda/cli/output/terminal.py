"""Terminal width detection."""

from __future__ import annotations

import os
from typing import Any

DEFAULT_TERMINAL_WIDTH = 100
STDOUT_FILENO = 1


def _fd_width(fd: int) -> int:
    try:
        return os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return 0


def _sink_width(out: Any) -> int:
    fileno = getattr(out, "fileno", None)
    if fileno is None:
        return 0
    try:
        fd = fileno()
    except (OSError, ValueError):
        # io.UnsupportedOperation for in-memory streams
        return 0
    return _fd_width(fd)


def _env_width() -> int:
    try:
        return int(os.getenv("COLUMNS", "").strip())
    except ValueError:
        return 0


def detect_terminal_width(out: Any = None, default: int = DEFAULT_TERMINAL_WIDTH) -> int:
    """Return the usable width of the terminal behind ``out``.

    Sources are tried in order: the sink's own descriptor, the process's
    stdout descriptor, the ``COLUMNS`` environment variable, then
    ``default``. Probing never raises.
    """
    if out is not None:
        width = _sink_width(out)
        if width > 0:
            return width
    width = _fd_width(STDOUT_FILENO)
    if width > 0:
        return width
    width = _env_width()
    if width > 0:
        return width
    return default
