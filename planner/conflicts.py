"""
Daily Planner — Conflict Detection

Checks a new or edited task against the existing collection:
- which time-bound tasks its window collides with
- per-collision type (overlap, or same-category overlap)
- aggregate severity (error blocks the save, warning only informs)
- a fallback start time probed forward in fixed steps

Severity is a policy signal for the caller. Nothing here raises on a
conflict; the report always comes back.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from planner.config import (
    DAILY_MATCH_EXACT,
    DAILY_MATCH_WEEKDAY_OVERLAP,
    PlannerConfig,
    get_config,
)
from planner.models import ConflictType, Severity, Task, TaskType
from planner.time_utils import MINUTES_PER_DAY, overlaps, to_time_string
from planner.weekdays import frequencies_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConflictEntry:
    """One existing task the candidate collides with."""

    task: Task
    conflict_type: ConflictType
    message: str

    def to_dict(self) -> dict:
        return {
            "conflictingTask": self.task.to_dict(),
            "conflictType": self.conflict_type.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class ConflictReport:
    """Result of a conflict check."""

    conflicts: tuple[ConflictEntry, ...] = field(default_factory=tuple)
    suggested_start: str | None = None

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0

    @property
    def severity(self) -> Severity:
        return conflict_severity(self.conflicts)

    @property
    def blocks_save(self) -> bool:
        """Callers refuse to persist the change when this is True."""
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        d = {
            "hasConflicts": self.has_conflicts,
            "severity": self.severity.value,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }
        if self.suggested_start is not None:
            d["suggestedTime"] = self.suggested_start
        return d


def conflict_severity(conflicts) -> Severity:
    """error if any same-category collision, warning if any collision, else none."""
    if not conflicts:
        return Severity.NONE
    if any(c.conflict_type == ConflictType.CATEGORY for c in conflicts):
        return Severity.ERROR
    return Severity.WARNING


def should_compare(
    task1: Task,
    task2: Task,
    today: date,
    daily_match: str = DAILY_MATCH_EXACT,
) -> bool:
    """
    Are two tasks ever on the calendar together?

    - completed or flexible tasks never take part
    - daily vs daily: same frequency (or shared weekday, see daily_match)
    - once vs once: same date
    - daily vs once: the once task is dated today
    """
    if task1.completed or task2.completed:
        return False

    if task1.type == TaskType.FLEXIBLE or task2.type == TaskType.FLEXIBLE:
        return False

    if task1.type == TaskType.DAILY and task2.type == TaskType.DAILY:
        if daily_match == DAILY_MATCH_WEEKDAY_OVERLAP:
            return frequencies_overlap(task1.frequency, task2.frequency)
        return task1.frequency == task2.frequency

    if task1.type == TaskType.ONCE and task2.type == TaskType.ONCE:
        return task1.date == task2.date

    once_task = task1 if task1.type == TaskType.ONCE else task2
    return once_task.date == today.isoformat()


def _message(other: Task, conflict_type: ConflictType) -> str:
    if conflict_type == ConflictType.CATEGORY:
        return f"You have another {other.category} task at {other.start_time}"
    return f"You have another task at {other.start_time}"


def find_next_available_start(
    candidate: Task,
    others: list[Task],
    today: date,
    config: PlannerConfig,
) -> str:
    """
    Probe forward from the requested start in fixed steps.

    Each probe assumes the default duration. The search stays within the
    requested day; when every probe collides the original start comes back
    unchanged, which is not a guarantee that it is free.
    """
    duration = config.default_duration_minutes
    step = config.suggestion_step_minutes
    desired = candidate.start_minutes()

    eligible = [
        o
        for o in others
        if o.is_time_bound and should_compare(candidate, o, today, config.daily_match)
    ]
    busy = [o.interval(duration) for o in eligible]

    for i in range(config.suggestion_max_probes):
        probe = desired + i * step
        if probe >= MINUTES_PER_DAY:
            break
        if not any(overlaps(probe, probe + duration, s, e) for s, e in busy):
            logger.debug("Probe %d free at %s", i, to_time_string(probe))
            return to_time_string(probe)

    logger.debug("No free probe after %s for task %s", candidate.start_time, candidate.id)
    return candidate.start_time


def detect_conflicts(
    candidate: Task,
    others: list[Task],
    *,
    reference_date: date | None = None,
    config: PlannerConfig | None = None,
) -> ConflictReport:
    """
    Check a candidate task against existing tasks.

    Args:
        candidate: New or edited task
        others: Existing tasks (the candidate itself must not be in here)
        reference_date: The day daily tasks are assumed to run on (defaults to today)
        config: Scheduling config (defaults to the loaded planner config)

    Returns:
        ConflictReport with collisions, severity and suggested start
    """
    if reference_date is None:
        reference_date = date.today()
    if config is None:
        config = get_config()

    if not candidate.start_time:
        return ConflictReport()

    duration = config.default_duration_minutes
    start, end = candidate.interval(duration)

    conflicts = []
    for other in others:
        if not should_compare(candidate, other, reference_date, config.daily_match):
            continue
        if not other.start_time:
            continue

        other_start, other_end = other.interval(duration)
        if not overlaps(start, end, other_start, other_end):
            continue

        if candidate.category is not None and candidate.category == other.category:
            conflict_type = ConflictType.CATEGORY
        else:
            conflict_type = ConflictType.OVERLAP
        conflicts.append(
            ConflictEntry(
                task=other,
                conflict_type=conflict_type,
                message=_message(other, conflict_type),
            )
        )

    if not conflicts:
        return ConflictReport()

    suggested = find_next_available_start(candidate, others, reference_date, config)
    report = ConflictReport(conflicts=tuple(conflicts), suggested_start=suggested)
    logger.info(
        "Task %s at %s collides with %d task(s), severity=%s, suggested=%s",
        candidate.id,
        candidate.start_time,
        len(conflicts),
        report.severity,
        suggested,
    )
    return report


def detect_edit_conflicts(
    edited: Task,
    tasks: list[Task],
    *,
    reference_date: date | None = None,
    config: PlannerConfig | None = None,
) -> ConflictReport:
    """Conflict check for an edit: the task's own stored version is left out."""
    others = [t for t in tasks if t.id != edited.id]
    return detect_conflicts(edited, others, reference_date=reference_date, config=config)
