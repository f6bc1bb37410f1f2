"""
Pydantic request/response models for the planner API.

The wire shape uses camelCase keys (startTime, suggestedTime, ...), the
same shape the task collection is stored in. Models accept either the
alias or the snake_case field name.

Boundary preconditions the scheduling core trusts are enforced here:
- times are zero-padded HH:MM
- endTime is not earlier than startTime
- flexible tasks carry no times, daily tasks no date, once tasks no frequency
"""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from planner.models import (
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
from planner.time_utils import is_valid_time, to_minutes


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ==== Task ====


class TaskModel(WireModel):
    """A task as stored by the application."""

    id: str = Field(min_length=1, description="Opaque unique identifier")
    title: str = Field(min_length=1, description="Display title")
    type: TaskType
    completed: bool = False
    category: Category | None = None
    frequency: Frequency | None = Field(default=None, description="daily tasks only")
    flexible_duration: FlexibleDuration | None = Field(default=None, alias="flexibleDuration")
    start_time: str | None = Field(default=None, alias="startTime", description="HH:MM")
    end_time: str | None = Field(default=None, alias="endTime", description="HH:MM")
    date: str | None = Field(default=None, description="ISO date, once tasks only")
    suggested_time: str | None = Field(default=None, alias="suggestedTime")
    priority: Priority | None = None

    @field_validator("start_time", "end_time", "suggested_time")
    @classmethod
    def _check_time(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_time(v):
            raise ValueError("must be a zero-padded HH:MM time")
        return v

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str | None) -> str | None:
        if v is not None:
            datetime.date.fromisoformat(v)
        return v

    @model_validator(mode="after")
    def _check_shape(self) -> "TaskModel":
        if self.start_time and self.end_time:
            if to_minutes(self.end_time) < to_minutes(self.start_time):
                raise ValueError("endTime must not be earlier than startTime")
        if self.end_time and not self.start_time:
            raise ValueError("endTime requires startTime")
        if self.type == TaskType.FLEXIBLE and (self.start_time or self.end_time):
            raise ValueError("flexible tasks cannot carry startTime/endTime")
        if self.type == TaskType.DAILY and self.date:
            raise ValueError("daily tasks cannot carry a date")
        if self.type == TaskType.ONCE and self.frequency:
            raise ValueError("once tasks cannot carry a frequency")
        return self

    def to_task(self) -> Task:
        return Task(**self.model_dump())

    @classmethod
    def from_task(cls, task: Task) -> "TaskModel":
        return cls.model_validate(task.to_dict())


# ==== Conflict check ====


class ConflictCheckRequest(WireModel):
    task: TaskModel = Field(description="New or edited task")
    tasks: list[TaskModel] = Field(default_factory=list, description="Existing collection")
    edit: bool = Field(default=False, description="Leave out the stored copy of `task`")
    reference_date: datetime.date | None = Field(default=None, alias="referenceDate")


class ConflictEntryModel(WireModel):
    conflicting_task: TaskModel = Field(alias="conflictingTask")
    conflict_type: ConflictType = Field(alias="conflictType")
    message: str


class ConflictCheckResponse(WireModel):
    has_conflicts: bool = Field(alias="hasConflicts")
    severity: Severity
    conflicts: list[ConflictEntryModel] = Field(default_factory=list)
    suggested_time: str | None = Field(default=None, alias="suggestedTime")


# ==== Optimization ====


class OptimizeRequest(WireModel):
    tasks: list[TaskModel] = Field(default_factory=list)


class SuggestionModel(WireModel):
    id: str
    suggested_time: str = Field(alias="suggestedTime")


class OptimizeResponse(WireModel):
    suggestions: list[SuggestionModel] = Field(default_factory=list)
    cleared: list[str] = Field(default_factory=list, description="Flexible ids left without a slot")
    nothing_to_optimize: bool = Field(alias="nothingToOptimize")
    message: str
    tasks: list[TaskModel] = Field(
        default_factory=list, description="Collection with suggestions applied"
    )


# ==== Agenda ====


class AgendaRequest(WireModel):
    tasks: list[TaskModel] = Field(default_factory=list)
    reference_date: datetime.date | None = Field(default=None, alias="referenceDate")
    now: str | None = Field(
        default=None, description="HH:MM; hides flexible items whose suggestion has passed"
    )

    @field_validator("now")
    @classmethod
    def _check_now(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_time(v):
            raise ValueError("must be a zero-padded HH:MM time")
        return v


class ScheduleItemModel(WireModel):
    time: str
    kind: ScheduleKind
    task: TaskModel


class SummaryModel(WireModel):
    total: int = 0
    daily: int = 0
    appointments: int = 0
    flexible: int = 0
    completed: int = 0


class AgendaResponse(WireModel):
    date: str = Field(description="ISO date the agenda was built for")
    items: list[ScheduleItemModel] = Field(default_factory=list)
    summary: SummaryModel


# ==== Health ====


class HealthResponse(WireModel):
    status: str = Field(description="healthy or error")
    version: str
    timestamp: str = Field(description="ISO timestamp")
    config: dict[str, Any] = Field(default_factory=dict)
