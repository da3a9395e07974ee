"""Tests for config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from pda.config import PdaConfig, default_config_path, load_config
from pda.errors import ConfigurationError


class TestDefaultConfigPath:
    """Tests for default_config_path."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("PDA_CONFIG", str(tmp_path / "custom.yaml"))
        assert default_config_path() == tmp_path / "custom.yaml"

    def test_xdg_config_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("PDA_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "pda" / "config.yaml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields the defaults."""
        assert load_config(tmp_path / "absent.yaml") == PdaConfig()

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == PdaConfig()

    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            f"store_dir: {tmp_path / 'stores'}\n"
            "default_db: work\n"
            "list:\n"
            "  format: markdown\n"
            "  style: ascii\n"
            "  header: false\n"
        )
        config = load_config(path)

        assert config.store_dir == tmp_path / "stores"
        assert config.default_db == "work"
        assert config.list.format == "markdown"
        assert config.list.style == "ascii"
        assert config.list.header is False

    def test_reads_env_path(self, config_path: Path) -> None:
        config_path.write_text("default_db: home\n")
        assert load_config().default_db == "home"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("list: [unclosed\n")
        with pytest.raises(ConfigurationError, match="cannot read"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            load_config(path)

    def test_schema_violation_names_field(self, tmp_path: Path) -> None:
        """Validation errors name the offending field."""
        path = tmp_path / "config.yaml"
        path.write_text("list:\n  format: yaml\n")
        with pytest.raises(ConfigurationError, match="list.format"):
            load_config(path)
