"""Human-readable formatting of values, expiries and durations."""

from __future__ import annotations

import re
import sys
import time
from datetime import datetime, timedelta, timezone

OMITTED_BINARY = "(omitted binary data)"

_DURATION_PART = re.compile(r"(\d+)([smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def stdout_is_tty() -> bool:
    """Check whether stdout is attached to a terminal."""
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def is_utf8(value: bytes) -> bool:
    try:
        value.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def format_bytes(value: bytes, *, include_binary: bool = False, tty: bool | None = None) -> str:
    """Render a stored value as text.

    Non UTF-8 values are replaced by a placeholder when writing to a
    terminal unless ``include_binary`` is set.
    """
    if tty is None:
        tty = stdout_is_tty()
    if is_utf8(value):
        return value.decode("utf-8")
    if tty and not include_binary:
        return OMITTED_BINARY
    return value.decode("utf-8", errors="replace")


def format_duration(seconds: int) -> str:
    """Format whole seconds like ``1h2m3s``, ``4m0s`` or ``5s``."""
    hours, rest = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


def format_expiry(expires_at: int, now: float | None = None) -> str:
    """Describe when an entry expires.

    Returns ``never`` for 0, otherwise the RFC 3339 UTC timestamp followed by
    either ``(expired)`` or the time remaining.
    """
    if expires_at == 0:
        return "never"
    if now is None:
        now = time.time()
    stamp = datetime.fromtimestamp(expires_at, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    remaining = expires_at - now
    if remaining <= 0:
        return f"{stamp} (expired)"
    return f"{stamp} (in {format_duration(round(remaining))})"


def parse_duration(value: str) -> timedelta:
    """Parse ``90``, ``90s``, ``10m``, ``1h30m`` or ``2d`` into a timedelta.

    Raises:
        ValueError: If the value is malformed or not positive.
    """
    text = value.strip().lower()
    if text.isdigit():
        seconds = int(text)
    else:
        pos = 0
        seconds = 0
        for match in _DURATION_PART.finditer(text):
            if match.start() != pos:
                break
            seconds += int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            pos = match.end()
        if pos == 0 or pos != len(text):
            raise ValueError(f"invalid duration {value!r}, use e.g. 90s, 10m, 1h30m or 2d")
    if seconds <= 0:
        raise ValueError(f"duration must be positive, got {value!r}")
    return timedelta(seconds=seconds)
