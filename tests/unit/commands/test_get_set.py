"""Tests for get and set commands."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pda.commands import get_value, set_value
from pda.errors import KeyFormatError, KeyNotFoundError, SecretValueError
from pda.store import Store


class TestSetValue:
    """Tests for set_value."""

    def test_returns_normalized_key(self, store: Store) -> None:
        result = set_value(store, "Name@Work", b"alice")
        assert str(result.key) == "name@work"

    def test_secret_and_ttl(self, store: Store) -> None:
        set_value(store, "token", b"hunter2", secret=True, ttl=timedelta(hours=1))
        entry = store.get("token")
        assert entry.secret
        assert entry.expires_at > 0

    def test_bad_key(self, store: Store) -> None:
        with pytest.raises(KeyFormatError):
            set_value(store, "a@b@c", b"v")


class TestGetValue:
    """Tests for get_value."""

    def test_plain_value(self, populated_store: Store) -> None:
        result = get_value(populated_store, "alpha")
        assert result.entry.value == b"first value"

    def test_other_db(self, populated_store: Store) -> None:
        assert get_value(populated_store, "NAME@work").entry.value == b"alice"

    def test_missing(self, populated_store: Store) -> None:
        with pytest.raises(KeyNotFoundError):
            get_value(populated_store, "gamma")

    def test_secret_requires_flag(self, populated_store: Store) -> None:
        """Secret values are only returned when explicitly requested."""
        with pytest.raises(SecretValueError, match="--include-secret"):
            get_value(populated_store, "token")
        result = get_value(populated_store, "token", include_secret=True)
        assert result.entry.value == b"hunter2"
