#!/usr/bin/env python3
"""
Daily Planner CLI - agenda, conflict checks and schedule optimization
over a local task file (PLANNER_TASKS_FILE or --file).
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from planner.agenda import build_agenda, frequency_label, summarize, upcoming_flexible
from planner.conflicts import detect_conflicts, detect_edit_conflicts
from planner.models import FlexibleDuration, ScheduleKind, Severity, Task
from planner.observability import configure_logging
from planner.scheduling_engine import apply_optimization, optimize
from planner.task_store import load_tasks, save_tasks
from planner.time_utils import is_valid_time, to_minutes

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_BLOCKED = 2

DURATION_LABELS = {FlexibleDuration.DAY: "Today", FlexibleDuration.WEEK: "This Week"}


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [max(len(str(row[i])) for row in [headers] + rows) for i in range(len(headers))]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def _parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"planner {prog}", description=description)
    parser.add_argument("--file", type=Path, default=None, help="Task file (JSON list)")
    return parser


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value}") from None


def _hhmm(value: str) -> str:
    if not is_valid_time(value):
        raise argparse.ArgumentTypeError(f"not an HH:MM time: {value}")
    return value


def cmd_agenda(args) -> int:
    """Show today's agenda."""
    parser = _parser("agenda", "Show the agenda for a day")
    parser.add_argument("--date", type=_iso_date, default=None, help="Day (YYYY-MM-DD)")
    parser.add_argument("--now", type=_hhmm, default=None, help="Hide passed suggestions")
    opts = parser.parse_args(args)

    tasks = load_tasks(opts.file)
    day = opts.date or date.today()
    items = build_agenda(tasks, reference_date=day)

    print_header(f"Agenda — {day.strftime('%A, %B %d, %Y')}")
    if not items:
        print("No tasks scheduled for today. Add some tasks to get started!")
        return EXIT_OK

    scheduled = [i for i in items if i.kind == ScheduleKind.SCHEDULED]
    flexible = [i for i in items if i.kind == ScheduleKind.FLEXIBLE]
    if opts.now is not None:
        flexible = upcoming_flexible(items, to_minutes(opts.now))

    if scheduled:
        print("\nScheduled Tasks")
        rows = [
            [
                i.display_time,
                i.task.title,
                i.task.type,
                frequency_label(i.task.frequency) or "",
                i.task.category or "",
            ]
            for i in scheduled
        ]
        print_table(["Time", "Title", "Type", "Repeats", "Category"], rows)

    if flexible:
        print("\nFlexible Tasks")
        rows = [
            [
                i.task.suggested_time or "-",
                i.task.title,
                DURATION_LABELS.get(i.task.flexible_duration, ""),
                i.task.category or "",
            ]
            for i in flexible
        ]
        print_table(["Suggested", "Title", "Window", "Category"], rows)

    return EXIT_OK


def cmd_optimize(args) -> int:
    """Suggest times for flexible tasks and write them back."""
    parser = _parser("optimize", "Suggest times for flexible tasks")
    parser.add_argument("--dry-run", action="store_true", help="Print without saving")
    opts = parser.parse_args(args)

    tasks = load_tasks(opts.file)
    result = optimize(tasks)

    print_header("Optimize Schedule")
    print(result.message)
    if result.nothing_to_optimize:
        print("Add some flexible tasks to get scheduling suggestions.")
        return EXIT_OK

    titles = {t.id: t.title for t in tasks}
    rows = [[s.suggested_time, titles.get(s.task_id, s.task_id)] for s in result.suggestions]
    rows.extend(["-", f"{titles.get(tid, tid)} (no free slot)"] for tid in result.cleared)
    print_table(["Time", "Task"], rows)

    if not opts.dry_run:
        save_tasks(apply_optimization(tasks, result), opts.file)
    return EXIT_OK


def cmd_check(args) -> int:
    """Check a task (JSON) for conflicts against the task file."""
    parser = _parser("check", "Check a task for time conflicts")
    parser.add_argument("task", help="Task record as JSON")
    parser.add_argument("--edit", action="store_true", help="Task is an edit of a stored task")
    parser.add_argument("--date", type=_iso_date, default=None, help="Reference day")
    opts = parser.parse_args(args)

    try:
        candidate = Task.from_dict(json.loads(opts.task))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Invalid task: {e}")
        return EXIT_USAGE

    tasks = load_tasks(opts.file)
    known = any(t.id == candidate.id for t in tasks)
    if known != opts.edit:
        hint = "already in the task file, use --edit" if known else "not in the task file"
        print(f"Task {candidate.id}: {hint}")
        return EXIT_USAGE
    check = detect_edit_conflicts if opts.edit else detect_conflicts
    report = check(candidate, tasks, reference_date=opts.date)

    print_header(f"Conflicts for '{candidate.title}'")
    if not report.has_conflicts:
        print("✓ No conflicts")
        return EXIT_OK

    for conflict in report.conflicts:
        print(f"⚠️  {conflict.message}")
    print(f"\nSeverity: {report.severity}")
    if report.suggested_start and report.suggested_start != candidate.start_time:
        print(f"Try {report.suggested_start} instead")

    return EXIT_BLOCKED if report.severity == Severity.ERROR else EXIT_OK


def cmd_stats(args) -> int:
    """Show task counts."""
    parser = _parser("stats", "Show task counts")
    opts = parser.parse_args(args)

    counts = summarize(load_tasks(opts.file))
    print_header("Task Stats")
    print_table(
        ["Total", "Daily", "Appointments", "Flexible", "Completed"],
        [[counts[k] for k in ("total", "daily", "appointments", "flexible", "completed")]],
    )
    return EXIT_OK


def cmd_help(args) -> int:
    """Show help."""
    print("""
Daily Planner CLI

Commands:
  agenda [--date D] [--now HH:MM]   Today's schedule
  optimize [--dry-run]              Suggest times for flexible tasks
  check '<task json>' [--edit]      Check a task for time conflicts
  stats                             Task counts
  help                              Show this help

All commands accept --file PATH (default: $PLANNER_TASKS_FILE or
~/.daily_planner/data/tasks.json).
""")
    return EXIT_OK


COMMANDS = {
    "agenda": cmd_agenda,
    "a": cmd_agenda,
    "optimize": cmd_optimize,
    "o": cmd_optimize,
    "check": cmd_check,
    "stats": cmd_stats,
    "help": cmd_help,
    "h": cmd_help,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging("WARNING", json_format=False)

    if not argv:
        return cmd_help([])

    cmd, args = argv[0], argv[1:]
    if cmd not in COMMANDS:
        print(f"Unknown command: {cmd}")
        print("Run 'help' for available commands.")
        return EXIT_USAGE

    try:
        return COMMANDS[cmd](args)
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
