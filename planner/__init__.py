# Daily Planner - Scheduling core
"""
Exports for the API, the CLI and other consumers.
"""

__version__ = "0.1.0"

from .agenda import ScheduleItem, build_agenda, summarize, upcoming_flexible
from .config import PlannerConfig, get_config, load_config
from .conflicts import (
    ConflictEntry,
    ConflictReport,
    conflict_severity,
    detect_conflicts,
    detect_edit_conflicts,
)
from .models import (
    Category,
    ConflictType,
    FlexibleDuration,
    Frequency,
    Priority,
    ScheduleKind,
    Severity,
    Task,
    TaskType,
)
from .scheduling_engine import OptimizationResult, Suggestion, apply_optimization, optimize
from .time_utils import to_minutes, to_time_string

__all__ = [
    "Task",
    "TaskType",
    "Category",
    "Frequency",
    "FlexibleDuration",
    "Priority",
    "ConflictType",
    "Severity",
    "ScheduleKind",
    "PlannerConfig",
    "get_config",
    "load_config",
    "to_minutes",
    "to_time_string",
    "ConflictEntry",
    "ConflictReport",
    "conflict_severity",
    "detect_conflicts",
    "detect_edit_conflicts",
    "OptimizationResult",
    "Suggestion",
    "optimize",
    "apply_optimization",
    "ScheduleItem",
    "build_agenda",
    "upcoming_flexible",
    "summarize",
]
