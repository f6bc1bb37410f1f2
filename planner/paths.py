from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "PLANNER_HOME"
APP_ENV_CONFIG = "PLANNER_CONFIG"
APP_ENV_TASKS = "PLANNER_TASKS_FILE"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains planner/, api/, cli/, config/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    User-writable home for the planner.
    Override with PLANNER_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".daily_planner").resolve()


def data_dir() -> Path:
    d = app_home() / "data"
    d.mkdir(parents=True, exist_ok=True)
    return d


def config_path() -> Path:
    """
    Scheduling config file.

    Resolution order:
    1. PLANNER_CONFIG env var (explicit override)
    2. <project root>/config/planner.yaml
    """
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser().resolve()
    return project_root() / "config" / "planner.yaml"


def tasks_path() -> Path:
    """Task collection file used by the CLI (PLANNER_TASKS_FILE overrides)."""
    if os.environ.get(APP_ENV_TASKS):
        return Path(os.environ[APP_ENV_TASKS]).expanduser().resolve()
    return data_dir() / "tasks.json"
