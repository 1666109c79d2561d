"""
Shared fixtures for the tasklog test suite.

Category-specific fixtures live in the test modules of each category
(core, store, pipeline, support, cli).
"""

from datetime import datetime, timedelta, timezone

import pytest

from tasklog.cli import TaskLogCLI
from tasklog.support.config import Config


@pytest.fixture
def t0():
    """A fixed, timezone-aware reference instant."""
    return datetime(2026, 3, 3, 14, 5, tzinfo=timezone.utc)


@pytest.fixture
def at(t0):
    """Build instants relative to t0: at(minutes=5)."""

    def _at(**delta):
        return t0 + timedelta(**delta)

    return _at


@pytest.fixture
def config(tmp_path, monkeypatch):
    """Default configuration rooted in a temporary data directory."""
    monkeypatch.delenv("EDITOR", raising=False)
    return Config(root=tmp_path / "data")


@pytest.fixture
def cli(config):
    """CLI facade using the temporary configuration."""
    return TaskLogCLI(config)
