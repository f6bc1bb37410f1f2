"""
Weekdays — which days a task is active on.

Single source of truth for frequency matching. The conflict detector and
the agenda builder both go through here so they agree on "today".
"""

import logging
from datetime import date

from planner.models import Frequency, Task, TaskType

logger = logging.getLogger(__name__)

# date.weekday(): Monday = 0 ... Sunday = 6
ALL_DAYS = frozenset(range(7))

_FREQUENCY_DAYS: dict[Frequency, frozenset[int]] = {
    Frequency.DAILY: ALL_DAYS,
    Frequency.WEEKDAYS: frozenset(range(5)),
    Frequency.MONDAY_TO_SATURDAY: frozenset(range(6)),
    Frequency.WEEKENDS: frozenset({5, 6}),
    Frequency.MONDAY: frozenset({0}),
    Frequency.TUESDAY: frozenset({1}),
    Frequency.WEDNESDAY: frozenset({2}),
    Frequency.THURSDAY: frozenset({3}),
    Frequency.FRIDAY: frozenset({4}),
    Frequency.SATURDAY: frozenset({5}),
    Frequency.SUNDAY: frozenset({6}),
}


def active_weekdays(frequency: Frequency | None) -> frozenset[int]:
    """Weekdays a frequency covers. No frequency = every day (legacy tasks)."""
    if frequency is None:
        return ALL_DAYS
    return _FREQUENCY_DAYS.get(frequency, ALL_DAYS)


def frequencies_overlap(a: Frequency | None, b: Frequency | None) -> bool:
    """True if two daily frequencies share at least one weekday."""
    return bool(active_weekdays(a) & active_weekdays(b))


def is_active_on(task: Task, day: date | None = None) -> bool:
    """
    Does a task apply to the given day? Defaults to today.

    - daily: weekday matches frequency
    - once: no date, or date equals the day
    - flexible: always
    """
    if day is None:
        day = date.today()

    if task.type == TaskType.DAILY:
        return day.weekday() in active_weekdays(task.frequency)
    if task.type == TaskType.ONCE:
        return not task.date or task.date == day.isoformat()
    return True
