"""Tests for value and time formatting helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pda.formatting import (
    OMITTED_BINARY,
    format_bytes,
    format_duration,
    format_expiry,
    is_utf8,
    parse_duration,
)


class TestFormatBytes:
    """Tests for format_bytes."""

    def test_utf8_value(self) -> None:
        assert format_bytes("héllo".encode(), tty=True) == "héllo"

    def test_binary_on_terminal_omitted(self) -> None:
        assert format_bytes(b"\xff\xfe", tty=True) == OMITTED_BINARY

    def test_binary_included_on_request(self) -> None:
        assert format_bytes(b"a\xff", include_binary=True, tty=True) == "a�"

    def test_binary_when_not_a_terminal(self) -> None:
        """Piped output never uses the placeholder."""
        assert format_bytes(b"a\xff", tty=False) == "a�"

    def test_is_utf8(self) -> None:
        assert is_utf8(b"plain")
        assert not is_utf8(b"\x80")


class TestDurations:
    """Tests for duration formatting and parsing."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0s"), (5, "5s"), (240, "4m0s"), (3723, "1h2m3s"), (90000, "25h0m0s")],
    )
    def test_format_duration(self, seconds: int, expected: str) -> None:
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("90", timedelta(seconds=90)),
            ("90s", timedelta(seconds=90)),
            ("10m", timedelta(minutes=10)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("2d", timedelta(days=2)),
            (" 1H ", timedelta(hours=1)),
        ],
    )
    def test_parse_duration(self, value: str, expected: timedelta) -> None:
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "10x", "m10", "1h 30m", "0", "0s"])
    def test_parse_duration_rejects(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(value)


class TestFormatExpiry:
    """Tests for format_expiry."""

    def test_never(self) -> None:
        assert format_expiry(0) == "never"

    def test_expired(self) -> None:
        assert format_expiry(1000, now=2000) == "1970-01-01T00:16:40Z (expired)"

    def test_remaining(self) -> None:
        assert format_expiry(7205, now=0) == "1970-01-01T02:00:05Z (in 2h0m5s)"
