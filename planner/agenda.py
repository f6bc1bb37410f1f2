"""
Agenda — today's display-ordered schedule.

Time-bound tasks come first, ordered by start time; flexible and other
untimed tasks follow under "Flexible". Applicability uses the same
weekday rules as conflict detection (planner.weekdays).
"""

import logging
from dataclasses import dataclass
from datetime import date

from planner.models import Frequency, ScheduleKind, Task, TaskType
from planner.time_utils import to_minutes
from planner.weekdays import is_active_on

logger = logging.getLogger(__name__)

FLEXIBLE_LABEL = "Flexible"

FREQUENCY_LABELS = {
    Frequency.DAILY: "Every day",
    Frequency.WEEKDAYS: "Mon-Fri",
    Frequency.MONDAY_TO_SATURDAY: "Mon-Sat",
    Frequency.WEEKENDS: "Sat-Sun",
}


@dataclass(frozen=True)
class ScheduleItem:
    display_time: str
    task: Task
    kind: ScheduleKind

    def to_dict(self) -> dict:
        return {
            "time": self.display_time,
            "kind": self.kind.value,
            "task": self.task.to_dict(),
        }


def display_time(task: Task) -> str:
    if not task.start_time:
        return FLEXIBLE_LABEL
    if task.end_time:
        return f"{task.start_time} - {task.end_time}"
    return task.start_time


def build_agenda(tasks: list[Task], reference_date: date | None = None) -> list[ScheduleItem]:
    """
    Build the agenda for a day (defaults to today).

    Completed tasks are left out. "HH:MM" strings are zero-padded, so a
    plain string sort is chronological.
    """
    if reference_date is None:
        reference_date = date.today()

    todays = [t for t in tasks if t.is_active and is_active_on(t, reference_date)]

    scheduled = sorted((t for t in todays if t.start_time), key=lambda t: t.start_time)
    untimed = [t for t in todays if not t.start_time]

    items = [ScheduleItem(display_time(t), t, ScheduleKind.SCHEDULED) for t in scheduled]
    items.extend(ScheduleItem(FLEXIBLE_LABEL, t, ScheduleKind.FLEXIBLE) for t in untimed)

    logger.debug(
        "Agenda for %s: %d scheduled, %d flexible", reference_date, len(scheduled), len(untimed)
    )
    return items


def upcoming_flexible(items: list[ScheduleItem], now_minutes: int) -> list[ScheduleItem]:
    """Flexible items still worth showing: no suggestion, or one later than now."""
    result = []
    for item in items:
        if item.kind != ScheduleKind.FLEXIBLE:
            continue
        suggested = item.task.suggested_time
        if not suggested or to_minutes(suggested) > now_minutes:
            result.append(item)
    return result


def summarize(tasks: list[Task]) -> dict[str, int]:
    """Counts shown on the dashboard header."""
    active = [t for t in tasks if t.is_active]
    return {
        "total": len(active),
        "daily": sum(1 for t in active if t.type == TaskType.DAILY),
        "appointments": sum(1 for t in active if t.type == TaskType.ONCE),
        "flexible": sum(1 for t in active if t.type == TaskType.FLEXIBLE),
        "completed": len(tasks) - len(active),
    }


def frequency_label(frequency: Frequency | None) -> str | None:
    if frequency is None:
        return None
    return FREQUENCY_LABELS.get(frequency, frequency.value.capitalize())
