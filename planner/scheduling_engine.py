"""
Daily Planner — Scheduling Engine

Free-slot allocation for flexible tasks:
- occupied intervals = time-bound tasks + injected sleep/morning blocks
- free gaps inside the working window (07:00-23:00 by default)
- greedy first-fit assignment of flexible tasks in collection order

Single pass, no backtracking, no reordering. Every step works on a new
slot tuple instead of shrinking slots in place, so optimize() is a pure
function of its inputs.
"""

import logging
from dataclasses import dataclass, field, replace

from planner.config import PlannerConfig, get_config
from planner.models import Task
from planner.time_utils import overlaps, to_minutes, to_time_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeSlot:
    """A [start, end) minute interval within one day."""

    start: int
    end: int

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeSlot") -> bool:
        return overlaps(self.start, self.end, other.start, other.end)

    def shrink(self, minutes: int) -> "TimeSlot":
        """New slot with the first `minutes` taken off."""
        return replace(self, start=self.start + minutes)

    def to_dict(self) -> dict:
        return {
            "start": to_time_string(self.start),
            "end": to_time_string(self.end),
            "durationMinutes": self.duration_minutes,
        }


@dataclass(frozen=True)
class Suggestion:
    task_id: str
    suggested_time: str

    def to_dict(self) -> dict:
        return {"id": self.task_id, "suggestedTime": self.suggested_time}


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of one optimization pass."""

    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)
    cleared: tuple[str, ...] = field(default_factory=tuple)  # flexible ids left without a slot
    nothing_to_optimize: bool = False

    @property
    def message(self) -> str:
        if self.nothing_to_optimize:
            return "No flexible tasks to optimize"
        return f"Suggested times for {len(self.suggestions)} flexible task(s)"

    def to_dict(self) -> dict:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "cleared": list(self.cleared),
            "nothingToOptimize": self.nothing_to_optimize,
            "message": self.message,
        }


def occupied_intervals(tasks: list[Task], config: PlannerConfig) -> list[TimeSlot]:
    """
    Sorted occupied intervals for the day.

    Every active time-bound task counts (missing end = start + default
    duration). Each fixed block is added unless a real task already
    overlaps it.
    """
    duration = config.default_duration_minutes
    real = [
        TimeSlot(*t.interval(duration)) for t in tasks if t.is_active and t.is_time_bound
    ]

    occupied = list(real)
    for block in config.fixed_blocks:
        virtual = TimeSlot(to_minutes(block.start), to_minutes(block.end))
        if any(virtual.overlaps(r) for r in real):
            logger.debug("Skipping fixed block %s, a task already occupies it", block.name)
            continue
        occupied.append(virtual)

    occupied.sort(key=lambda s: (s.start, s.end))
    return occupied


def find_free_slots(occupied: list[TimeSlot], config: PlannerConfig) -> list[TimeSlot]:
    """
    Free gaps of at least slot_minutes inside the working window.

    `occupied` must be sorted by start. Gaps are clamped to the window end.
    """
    min_len = config.slot_minutes
    window_start = to_minutes(config.working_start)
    window_end = to_minutes(config.working_end)

    slots = []
    last_end = window_start

    for interval in occupied:
        if last_end >= window_end:
            break
        gap_end = min(interval.start, window_end)
        if gap_end - last_end >= min_len:
            slots.append(TimeSlot(last_end, gap_end))
        last_end = max(last_end, interval.end)

    if window_end - last_end >= min_len:
        slots.append(TimeSlot(last_end, window_end))

    return slots


def assign_slots(
    flexible: list[Task],
    slots: list[TimeSlot],
    slot_minutes: int,
) -> tuple[list[Suggestion], tuple[TimeSlot, ...]]:
    """
    First-fit assignment in task order.

    Returns the suggestions and the remaining slots. Stops at the first
    task that finds no usable slot; later tasks get nothing either.
    """
    remaining = tuple(slots)
    suggestions = []
    idx = 0

    for task in flexible:
        while idx < len(remaining) and remaining[idx].duration_minutes < slot_minutes:
            idx += 1
        if idx >= len(remaining):
            logger.debug("Out of slots at task %s", task.id)
            break

        slot = remaining[idx]
        suggestions.append(Suggestion(task_id=task.id, suggested_time=to_time_string(slot.start)))
        remaining = remaining[:idx] + (slot.shrink(slot_minutes),) + remaining[idx + 1 :]

    return suggestions, remaining


def optimize(tasks: list[Task], config: PlannerConfig | None = None) -> OptimizationResult:
    """
    Suggest start times for active flexible tasks.

    Returns an OptimizationResult; apply it with apply_optimization().
    """
    if config is None:
        config = get_config()

    flexible = [t for t in tasks if t.is_flexible and t.is_active]
    if not flexible:
        logger.info("No flexible tasks to optimize")
        return OptimizationResult(nothing_to_optimize=True)

    occupied = occupied_intervals(tasks, config)
    slots = find_free_slots(occupied, config)
    suggestions, _ = assign_slots(flexible, slots, config.slot_minutes)

    assigned = {s.task_id for s in suggestions}
    cleared = tuple(t.id for t in flexible if t.id not in assigned)

    logger.info(
        "Optimized %d flexible task(s): %d placed in %d free slot(s), %d without a slot",
        len(flexible),
        len(suggestions),
        len(slots),
        len(cleared),
    )
    return OptimizationResult(suggestions=tuple(suggestions), cleared=cleared)


def apply_optimization(tasks: list[Task], result: OptimizationResult) -> list[Task]:
    """
    New task list with suggestions written onto active flexible tasks.

    Active flexible tasks without a suggestion get suggested_time cleared.
    Completed and time-bound tasks come back unchanged.
    """
    if result.nothing_to_optimize:
        return list(tasks)

    by_id = {s.task_id: s.suggested_time for s in result.suggestions}
    return [
        t.with_suggestion(by_id.get(t.id)) if t.is_flexible and t.is_active else t
        for t in tasks
    ]
