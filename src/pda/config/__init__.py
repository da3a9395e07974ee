"""Configuration loading for pda."""

from pda.config.loader import default_config_path, load_config
from pda.config.schema import ListDefaults, PdaConfig

__all__ = [
    "ListDefaults",
    "PdaConfig",
    "default_config_path",
    "load_config",
]
