"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and level changed by setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"
