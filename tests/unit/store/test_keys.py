"""Tests for key and database reference parsing."""

from __future__ import annotations

import pytest

from pda.errors import KeyFormatError
from pda.store.keys import KeyRef, parse_db, parse_key


class TestParseKey:
    """Tests for parse_key."""

    def test_key_only(self) -> None:
        assert parse_key("Name") == KeyRef(key="name", db="default")

    def test_key_and_db(self) -> None:
        ref = parse_key("Name@Work")
        assert ref == KeyRef(key="name", db="work")
        assert str(ref) == "name@work"

    def test_custom_default(self) -> None:
        assert parse_key("name", default_db="home").db == "home"

    def test_no_default(self) -> None:
        ref = parse_key("name", default_db=None)
        assert ref.db == ""
        assert str(ref) == "name"

    def test_too_many_separators(self) -> None:
        with pytest.raises(KeyFormatError, match="bad key format, use KEY@DB"):
            parse_key("a@b@c")


class TestParseDb:
    """Tests for parse_db."""

    @pytest.mark.parametrize("value", ["work", "@work", " @Work "])
    def test_normalized(self, value: str) -> None:
        assert parse_db(value) == "work"

    @pytest.mark.parametrize("value", ["", "@", "   "])
    def test_blank_rejected(self, value: str) -> None:
        with pytest.raises(KeyFormatError, match="bad db format"):
            parse_db(value)

    def test_blank_uses_default(self) -> None:
        assert parse_db("@", default_db="default") == "default"


class TestEmptyDbPart:
    """A trailing ``@`` with no database name."""

    def test_falls_back_to_default(self) -> None:
        assert parse_key("Name@") == KeyRef(key="name", db="default")

    def test_uses_custom_default(self) -> None:
        assert parse_key("name@", default_db="home") == KeyRef(key="name", db="home")
