"""Shared test fixtures for pda tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from dotenv import load_dotenv

from pda.log import reset_logging
from pda.store import Store

# Load .env from project root (doesn't override existing env vars)
load_dotenv(Path(__file__).parent.parent / ".env")


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers the CLI attached to a stream that no longer exists."""
    yield
    reset_logging()


@pytest.fixture
def store_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point pda at an empty store root and a missing config file."""
    root = tmp_path / "stores"
    monkeypatch.setenv("PDA_STORE_DIR", str(root))
    monkeypatch.setenv("PDA_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.delenv("COLUMNS", raising=False)
    return root


@pytest.fixture
def store(store_root: Path) -> Store:
    """Store over the temporary root."""
    return Store(store_root)


@pytest.fixture
def config_path(tmp_path: Path, store_root: Path) -> Path:
    """Path the CLI reads its configuration from."""
    return tmp_path / "config.yaml"


@pytest.fixture
def populated_store(store: Store) -> Store:
    """Store with a handful of entries in two databases."""
    store.set("alpha", b"first value")
    store.set("beta", b"second value")
    store.set("token", b"hunter2", secret=True)
    store.set("blob", b"\x00\xff\xfe")
    store.set("name@work", b"alice")
    return store
