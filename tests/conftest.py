"""Pytest fixtures for Timelog tests."""

from datetime import datetime

import pytest

from timelog.config import TimelogConfig
from timelog.controller import TimelogController
from timelog.ledger import LedgerWriter
from timelog.paths import VaultPaths


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TIMELOG_* variables from the outer environment out of tests."""
    for name in (
        "TIMELOG_VAULT",
        "TIMELOG_REPLACEMENT_INTERVAL",
        "TIMELOG_USE_LIST",
        "TIMELOG_LOG_FORMAT",
        "TIMELOG_DEBOUNCE_MS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_vault(tmp_path):
    """Create a temporary vault for testing.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary vault root
    """
    vault_root = tmp_path / "test_vault"
    (vault_root / ".obsidian").mkdir(parents=True)
    return vault_root


@pytest.fixture
def vault_paths(temp_vault):
    """Create VaultPaths for temporary vault."""
    paths = VaultPaths(temp_vault)

    for directory in paths.get_all_directories():
        directory.mkdir(parents=True, exist_ok=True)

    return paths


@pytest.fixture
def vault_config():
    """Default settings snapshot."""
    return TimelogConfig()


@pytest.fixture
def now():
    """A fixed instant: 2024-05-11 10:00."""
    return datetime(2024, 5, 11, 10, 0, 0)


@pytest.fixture
def notices():
    """Collects notices shown to the user."""
    return []


@pytest.fixture
def controller(vault_config, vault_paths, notices):
    """Controller wired to a ledger in the temporary vault."""
    return TimelogController(
        config=vault_config,
        ledger_writer=LedgerWriter(vault_paths.ledger_file),
        notify=notices.append,
        document="Daily.md",
    )
