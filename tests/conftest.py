"""
Test configuration — repo root on sys.path + isolation guards.

This allows tests to import planner, api, cli and tests.fixtures.
Every test gets its own PLANNER_HOME and a fresh config cache so nothing
reads or writes the real user home.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from planner.config import PlannerConfig, reset_config  # noqa: E402
from tests.fixtures import MONDAY  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point PLANNER_HOME at a temp dir and drop any cached config."""
    monkeypatch.setenv("PLANNER_HOME", str(tmp_path / "planner_home"))
    monkeypatch.delenv("PLANNER_CONFIG", raising=False)
    monkeypatch.delenv("PLANNER_TASKS_FILE", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def today() -> date:
    """Pinned reference date (a Monday)."""
    return MONDAY


@pytest.fixture
def config() -> PlannerConfig:
    """Built-in default scheduling config."""
    return PlannerConfig()
