"""Tests for dump and restore commands."""

from __future__ import annotations

import json

import pytest

from pda.commands import DumpEncoding, DumpEntry, decode_value, dump, encode_entry, restore
from pda.errors import EncodingError, InvalidFormatError, RestoreError, StoreNotFoundError
from pda.store import Entry, Store


class TestEncodeEntry:
    """Tests for encode_entry."""

    def test_auto_text(self) -> None:
        record = encode_entry(Entry(key="k", value=b"hello"), DumpEncoding.AUTO)
        assert record.to_json() == '{"key":"k","value":"hello","encoding":"text"}'

    def test_auto_binary(self) -> None:
        record = encode_entry(Entry(key="k", value=b"\x00\xff"), DumpEncoding.AUTO)
        assert record.encoding == "base64"
        assert record.value == "AP8="

    def test_forced_base64(self) -> None:
        record = encode_entry(Entry(key="k", value=b"hi"), DumpEncoding.BASE64)
        assert record.value == "aGk="

    def test_text_rejects_binary(self) -> None:
        with pytest.raises(EncodingError, match="non-UTF8"):
            encode_entry(Entry(key="k", value=b"\xff"), DumpEncoding.TEXT)

    def test_metadata_included(self) -> None:
        record = encode_entry(
            Entry(key="k", value=b"v", secret=True, expires_at=42), DumpEncoding.AUTO
        )
        assert json.loads(record.to_json()) == {
            "key": "k",
            "value": "v",
            "encoding": "text",
            "secret": True,
            "expires_at": 42,
        }

    def test_parse_encoding(self) -> None:
        assert DumpEncoding.parse("base64") is DumpEncoding.BASE64
        with pytest.raises(InvalidFormatError):
            DumpEncoding.parse("hex")


class TestDump:
    """Tests for dump."""

    def test_skips_secrets(self, populated_store: Store) -> None:
        keys = [r.key for r in dump(populated_store)]
        assert keys == ["alpha", "beta", "blob"]

    def test_includes_secrets_on_request(self, populated_store: Store) -> None:
        keys = [r.key for r in dump(populated_store, include_secret=True)]
        assert "token" in keys

    def test_missing_db_fails_eagerly(self, populated_store: Store) -> None:
        """The database is checked before any record is produced."""
        with pytest.raises(StoreNotFoundError):
            dump(populated_store, db="nowhere")


class TestDecodeValue:
    """Tests for decode_value."""

    def test_text(self) -> None:
        assert decode_value(DumpEntry(key="k", value="hé")) == "hé".encode()

    def test_base64(self) -> None:
        assert decode_value(DumpEntry(key="k", value="AP8=", encoding="base64")) == b"\x00\xff"

    def test_invalid_base64(self) -> None:
        with pytest.raises(EncodingError, match="invalid base64"):
            decode_value(DumpEntry(key="k", value="!!", encoding="base64"))

    def test_unknown_encoding(self) -> None:
        with pytest.raises(EncodingError, match='unsupported encoding "hex"'):
            decode_value(DumpEntry(key="k", value="00", encoding="hex"))


class TestRestore:
    """Tests for restore."""

    def test_round_trip_through_dump(self, populated_store: Store) -> None:
        lines = [r.to_json() for r in dump(populated_store, include_secret=True)]
        result = restore(populated_store, lines, db="copy")

        assert result.db == "copy"
        assert result.restored == 4
        assert list(populated_store.iter_entries("copy")) == list(
            populated_store.iter_entries("default")
        )

    def test_blank_lines_skipped(self, store: Store) -> None:
        lines = ["", '{"key":"a","value":"1"}', "   ", '{"key":"b","value":"2"}']
        assert restore(store, lines).restored == 2

    def test_error_carries_line_number(self, store: Store) -> None:
        lines = ['{"key":"a","value":"1"}', "", "not json"]
        with pytest.raises(RestoreError) as exc_info:
            restore(store, lines)

        assert exc_info.value.line == 3
        assert exc_info.value.message.startswith("line 3:")
        assert list(store.iter_entries()) == []

    def test_missing_key(self, store: Store) -> None:
        with pytest.raises(RestoreError, match="line 1: missing key"):
            restore(store, ['{"key":"","value":"1"}'])

    def test_missing_value_field(self, store: Store) -> None:
        with pytest.raises(RestoreError, match="line 1: value"):
            restore(store, ['{"key":"a"}'])
