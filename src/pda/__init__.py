"""pda - key-value store for the command line.

Provides:
- Named databases below a per-user data directory
- get / set / del / delete-db for single keys and whole databases
- list with terminal-aware table layout, or CSV, HTML and Markdown
- NDJSON dump and restore
"""

from pda.config import PdaConfig, load_config
from pda.errors import (
    ConfigurationError,
    EncodingError,
    InvalidFormatError,
    KeyFormatError,
    KeyNotFoundError,
    NoColumnsSelectedError,
    PdaError,
    RestoreError,
    SecretValueError,
    StoreNotFoundError,
)
from pda.store import Entry, KeyRef, Store

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Store",
    "Entry",
    "KeyRef",
    "PdaConfig",
    "load_config",
    # Errors
    "PdaError",
    "ConfigurationError",
    "KeyFormatError",
    "StoreNotFoundError",
    "KeyNotFoundError",
    "SecretValueError",
    "EncodingError",
    "RestoreError",
    "NoColumnsSelectedError",
    "InvalidFormatError",
]
