"""
Daily Planner — Task model

A task is one of three kinds:
- daily: recurring on the weekdays its frequency names
- once: anchored to a single ISO date (absent = today)
- flexible: no fixed time; the optimizer may suggest one

The task collection is owned by the caller. Core code reads tasks and
returns new values; it never mutates a Task in place.
"""

import logging
from dataclasses import dataclass, replace
from enum import StrEnum

from planner.time_utils import end_minutes, to_minutes

logger = logging.getLogger(__name__)


class TaskType(StrEnum):
    DAILY = "daily"
    ONCE = "once"
    FLEXIBLE = "flexible"


class Category(StrEnum):
    MEDICINE = "medicine"
    APPOINTMENT = "appointment"
    WORK = "work"
    FAMILY = "family"
    PERSONAL = "personal"
    SCHOOL = "school"


class Frequency(StrEnum):
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    MONDAY_TO_SATURDAY = "monday_to_saturday"
    WEEKENDS = "weekends"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class FlexibleDuration(StrEnum):
    DAY = "day"
    WEEK = "week"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConflictType(StrEnum):
    OVERLAP = "overlap"  # Time windows intersect
    CATEGORY = "category"  # Intersect and share a category (more severe)


class Severity(StrEnum):
    NONE = "none"
    WARNING = "warning"
    ERROR = "error"


class ScheduleKind(StrEnum):
    SCHEDULED = "scheduled"
    FLEXIBLE = "flexible"


# Wire (stored) key -> attribute name
_WIRE_KEYS = {
    "id": "id",
    "title": "title",
    "type": "type",
    "completed": "completed",
    "category": "category",
    "frequency": "frequency",
    "flexibleDuration": "flexible_duration",
    "startTime": "start_time",
    "endTime": "end_time",
    "date": "date",
    "suggestedTime": "suggested_time",
    "priority": "priority",
}

_ENUM_FIELDS = {
    "type": TaskType,
    "category": Category,
    "frequency": Frequency,
    "flexible_duration": FlexibleDuration,
    "priority": Priority,
}


@dataclass(frozen=True)
class Task:
    """A planner task as held in the caller's collection."""

    id: str
    title: str
    type: TaskType
    completed: bool = False
    category: Category | None = None
    frequency: Frequency | None = None  # daily only
    flexible_duration: FlexibleDuration | None = None  # flexible only
    start_time: str | None = None  # daily/once, "HH:MM"
    end_time: str | None = None  # optional, defaults to start + 60 min
    date: str | None = None  # once only, ISO date
    suggested_time: str | None = None  # written by the optimizer
    priority: Priority | None = None  # metadata only

    @property
    def is_active(self) -> bool:
        return not self.completed

    @property
    def is_flexible(self) -> bool:
        return self.type == TaskType.FLEXIBLE

    @property
    def is_time_bound(self) -> bool:
        return bool(self.start_time)

    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    def end_minutes(self, default_duration: int = 60) -> int:
        return end_minutes(self.start_time, self.end_time, default_duration)

    def interval(self, default_duration: int = 60) -> tuple[int, int]:
        """Half-open [start, end) minute window of a time-bound task."""
        return self.start_minutes(), self.end_minutes(default_duration)

    def with_suggestion(self, suggested_time: str | None) -> "Task":
        return replace(self, suggested_time=suggested_time)

    def to_dict(self) -> dict:
        """Wire shape (camelCase keys); absent optional fields are omitted."""
        d = {}
        for wire_key, attr in _WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            d[wire_key] = value.value if isinstance(value, StrEnum) else value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Build from a wire record; snake_case keys are accepted too."""
        kwargs = {}
        for key, value in data.items():
            attr = _WIRE_KEYS.get(key, key)
            if attr not in cls.__dataclass_fields__:
                continue
            if value is None or value == "":
                continue
            enum_cls = _ENUM_FIELDS.get(attr)
            kwargs[attr] = enum_cls(value) if enum_cls else value
        kwargs["id"] = str(kwargs["id"])
        completed = kwargs.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"completed must be true or false, got {completed!r}")
        kwargs["completed"] = completed
        return cls(**kwargs)
