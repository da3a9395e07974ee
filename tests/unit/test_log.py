"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest

from pda.cli.output.table import ListFormat
from pda.commands import dump, list_entries
from pda.log import LOGGER_NAME, configure_logging, get_logger, level_for_verbosity
from pda.store import Store


class TestLibraryLogging:
    """pda used as a library without configure_logging."""

    def test_debug_events_not_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        get_logger("pda.example").debug("hidden event")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hidden event" not in captured.err

    def test_csv_output_is_clean(
        self, store: Store, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Only table data reaches stdout when listing to the default sink."""
        store.set("name", b"alice")
        list_entries(store, format=ListFormat.CSV)
        assert capsys.readouterr().out == "Key,Value\nname,alice\n"

    def test_dump_records_unaffected(
        self, populated_store: Store, capsys: pytest.CaptureFixture[str]
    ) -> None:
        records = [r.to_json() for r in dump(populated_store, db="work")]
        assert records == ['{"key":"name","value":"alice","encoding":"text"}']
        assert capsys.readouterr().out == ""


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_levels(self, verbosity: int, level: int) -> None:
        assert level_for_verbosity(verbosity) == level

    def test_debug_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(2)
        get_logger("pda.example").debug("planned widths", widths=[5, 48])

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "planned widths" in captured.err
        assert "widths=[5, 48]" in captured.err

    def test_warning_level_hides_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(0)
        get_logger("pda.example").info("restored entries")
        assert capsys.readouterr().err == ""

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(1)
        configure_logging(2)
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
