"""Configuration file discovery and loading."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from pda.config.schema import PdaConfig
from pda.errors import ConfigurationError
from pda.log import get_logger

logger = get_logger(__name__)

CONFIG_ENV = "PDA_CONFIG"
CONFIG_FILENAME = "config.yaml"


def default_config_path() -> Path:
    """Resolve the config path from ``$PDA_CONFIG`` or the XDG config home."""
    override = os.getenv(CONFIG_ENV, "").strip()
    if override:
        return Path(override).expanduser()

    base = os.getenv("XDG_CONFIG_HOME", "").strip()
    root = Path(base).expanduser() if base else Path.home() / ".config"
    return root / "pda" / CONFIG_FILENAME


def load_config(path: Path | None = None) -> PdaConfig:
    """Load and validate the configuration file.

    Args:
        path: Explicit file to read. Defaults to :func:`default_config_path`.

    Returns:
        Parsed configuration, or defaults when the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    config_path = path or default_config_path()
    if not config_path.is_file():
        logger.debug("config file not found, using defaults", path=str(config_path))
        return PdaConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot read {config_path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{config_path}: expected a mapping at top level")

    try:
        config = PdaConfig.model_validate(raw)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"{config_path}: {errors}") from e

    logger.debug("loaded config", path=str(config_path))
    return config
