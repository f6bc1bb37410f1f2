"""
Task collection file — load/save the caller's tasks as JSON.

Stand-in for the application's persistence layer when the planner runs
from the command line. The file holds a JSON list of wire-shape tasks.
"""

import json
import logging
from pathlib import Path

from planner import paths
from planner.models import Task

logger = logging.getLogger(__name__)


def load_tasks(path: Path | None = None) -> list[Task]:
    """Load tasks from disk. Missing file -> empty list."""
    if path is None:
        path = paths.tasks_path()
    if not path.exists():
        logger.info("No task file at %s, starting empty", path)
        return []

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.error("Task file %s is not valid JSON: %s", path, e)
        raise ValueError(f"Invalid task file {path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Invalid task file {path}: expected a JSON list")

    try:
        return [Task.from_dict(raw) for raw in data]
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Task file %s has an invalid task record: %s", path, e)
        raise ValueError(f"Invalid task record in {path}: {e}") from e


def save_tasks(tasks: list[Task], path: Path | None = None) -> None:
    """Persist tasks to disk (pretty-printed)."""
    if path is None:
        path = paths.tasks_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([t.to_dict() for t in tasks], indent=2))
    logger.debug("Saved %d task(s) to %s", len(tasks), path)
