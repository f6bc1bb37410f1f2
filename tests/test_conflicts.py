"""
Tests for conflict detection: eligibility, classification, severity and
the suggested fallback start.
"""

from dataclasses import replace

import pytest

from planner.config import DAILY_MATCH_WEEKDAY_OVERLAP, PlannerConfig
from planner.conflicts import (
    ConflictReport,
    conflict_severity,
    detect_conflicts,
    detect_edit_conflicts,
    find_next_available_start,
    should_compare,
)
from planner.models import Category, ConflictType, Frequency, Severity
from tests.fixtures import daily, flexible, once


class TestShouldCompare:
    def test_completed_never_compared(self, today):
        assert should_compare(daily("a", "09:00", completed=True), daily("b", "09:00"), today) is False

    def test_flexible_never_compared(self, today):
        assert should_compare(flexible("a"), daily("b", "09:00"), today) is False

    def test_flexible_never_compared_as_other(self, today):
        assert should_compare(daily("a", "09:00"), flexible("b", start_time="09:00"), today) is False

    def test_daily_same_frequency(self, today):
        assert should_compare(daily("a", "09:00"), daily("b", "09:00"), today) is True

    def test_daily_different_frequency_exact(self, today):
        a = daily("a", "09:00", frequency=Frequency.WEEKDAYS)
        b = daily("b", "09:00", frequency=Frequency.MONDAY)
        assert should_compare(a, b, today) is False

    def test_daily_shared_weekday_overlap_mode(self, today):
        a = daily("a", "09:00", frequency=Frequency.WEEKDAYS)
        b = daily("b", "09:00", frequency=Frequency.MONDAY)
        assert should_compare(a, b, today, DAILY_MATCH_WEEKDAY_OVERLAP) is True

    def test_daily_disjoint_weekdays_overlap_mode(self, today):
        a = daily("a", "09:00", frequency=Frequency.WEEKENDS)
        b = daily("b", "09:00", frequency=Frequency.MONDAY)
        assert should_compare(a, b, today, DAILY_MATCH_WEEKDAY_OVERLAP) is False

    def test_once_same_date(self, today):
        assert should_compare(once("a", "09:00"), once("b", "09:00"), today) is True

    def test_once_different_date(self, today):
        assert should_compare(once("a", "09:00"), once("b", "09:00", on="2026-10-20"), today) is False

    def test_daily_vs_once_today(self, today):
        assert should_compare(daily("a", "09:00"), once("b", "09:00"), today) is True
        assert should_compare(once("b", "09:00"), daily("a", "09:00"), today) is True

    def test_daily_vs_once_other_day(self, today):
        assert should_compare(daily("a", "09:00"), once("b", "09:00", on="2026-10-21"), today) is False

    def test_daily_vs_undated_once(self, today):
        assert should_compare(daily("a", "09:00"), once("b", "09:00", on=None), today) is False


class TestSeverity:
    def test_none(self):
        assert conflict_severity([]) == Severity.NONE

    def test_empty_report(self):
        report = ConflictReport()
        assert report.has_conflicts is False
        assert report.severity == Severity.NONE
        assert report.blocks_save is False


class TestDetectConflicts:
    def test_same_category_is_error(self, today, config):
        existing = [daily("work", "09:00", "10:00", category=Category.WORK)]
        candidate = daily("new", "09:30", category=Category.WORK)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert report.severity == Severity.ERROR
        assert report.blocks_save is True
        assert len(report.conflicts) == 1
        assert report.conflicts[0].conflict_type == ConflictType.CATEGORY
        assert report.conflicts[0].message == "You have another work task at 09:00"
        assert report.suggested_start == "10:00"

    def test_different_category_is_warning(self, today, config):
        existing = [daily("work", "09:00", "10:00", category=Category.WORK)]
        candidate = daily("new", "09:30", category=Category.FAMILY)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert report.severity == Severity.WARNING
        assert report.blocks_save is False
        assert report.conflicts[0].conflict_type == ConflictType.OVERLAP
        assert report.conflicts[0].message == "You have another task at 09:00"
        assert report.suggested_start == "10:00"

    def test_missing_categories_never_escalate(self, today, config):
        existing = [daily("a", "09:00", category=None)]
        candidate = daily("b", "09:00", category=None)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert report.severity == Severity.WARNING

    def test_touching_windows_are_free(self, today, config):
        existing = [daily("a", "09:00", "10:00")]
        report = detect_conflicts(daily("b", "10:00"), existing, reference_date=today, config=config)
        assert report.has_conflicts is False
        assert report.suggested_start is None

    def test_untimed_candidate_has_no_conflicts(self, today, config):
        existing = [once("a", "09:00")]
        report = detect_conflicts(once("b", None), existing, reference_date=today, config=config)
        assert report.severity == Severity.NONE

    def test_untimed_existing_ignored(self, today, config):
        existing = [once("a", None)]
        report = detect_conflicts(once("b", "09:00"), existing, reference_date=today, config=config)
        assert report.has_conflicts is False

    def test_timed_flexible_existing_ignored(self, today, config):
        existing = [
            daily("a", "09:00"),
            flexible("f", category=Category.WORK, start_time="10:00", end_time="11:00"),
        ]
        candidate = daily("b", "09:30", category=Category.WORK)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert [c.task.id for c in report.conflicts] == ["a"]
        assert report.suggested_start == "10:00"

    def test_completed_existing_ignored(self, today, config):
        existing = [daily("a", "09:00", completed=True)]
        report = detect_conflicts(daily("b", "09:00"), existing, reference_date=today, config=config)
        assert report.has_conflicts is False

    def test_one_entry_per_colliding_task(self, today, config):
        existing = [
            daily("a", "09:00", category=Category.WORK),
            daily("b", "09:30", category=Category.FAMILY),
            daily("c", "11:00", category=Category.WORK),
        ]
        candidate = daily("new", "09:15", category=Category.FAMILY)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert [c.task.id for c in report.conflicts] == ["a", "b"]
        assert [c.conflict_type for c in report.conflicts] == [
            ConflictType.OVERLAP,
            ConflictType.CATEGORY,
        ]
        assert report.severity == Severity.ERROR

    def test_weekday_overlap_mode_catches_cross_frequency(self, today):
        config = PlannerConfig(daily_match=DAILY_MATCH_WEEKDAY_OVERLAP)
        existing = [daily("a", "09:00", frequency=Frequency.WEEKDAYS)]
        candidate = daily("b", "09:00", frequency=Frequency.MONDAY)

        report = detect_conflicts(candidate, existing, reference_date=today, config=config)

        assert report.severity == Severity.ERROR

    def test_report_wire_shape(self, today, config):
        existing = [daily("a", "09:00")]
        report = detect_conflicts(daily("b", "09:00"), existing, reference_date=today, config=config)

        d = report.to_dict()

        assert d["hasConflicts"] is True
        assert d["severity"] == "error"
        assert d["suggestedTime"] == "10:00"
        assert d["conflicts"][0]["conflictType"] == "category"
        assert d["conflicts"][0]["conflictingTask"]["id"] == "a"

    def test_defaults_to_loaded_config(self, today):
        existing = [daily("a", "09:00")]
        report = detect_conflicts(daily("b", "09:30"), existing, reference_date=today)
        assert report.suggested_start == "10:00"


class TestEditConflicts:
    def test_own_stored_copy_left_out(self, today, config):
        stored = daily("a", "09:00")
        edited = replace(stored, start_time="09:30")

        report = detect_edit_conflicts(edited, [stored], reference_date=today, config=config)

        assert report.has_conflicts is False

    def test_other_tasks_still_checked(self, today, config):
        stored = daily("a", "09:00")
        neighbour = daily("b", "10:00")
        edited = replace(stored, start_time="09:30")

        report = detect_edit_conflicts(
            edited, [stored, neighbour], reference_date=today, config=config
        )

        assert [c.task.id for c in report.conflicts] == ["b"]
        assert report.suggested_start == "11:00"


class TestSuggestedStart:
    def test_first_free_step(self, today, config):
        existing = [daily("a", "09:00", "10:15")]
        assert find_next_available_start(daily("b", "09:30"), existing, today, config) == "10:30"

    def test_step_size_from_config(self, today):
        config = PlannerConfig(suggestion_step_minutes=15)
        existing = [daily("a", "09:00", "10:15")]
        assert find_next_available_start(daily("b", "09:30"), existing, today, config) == "10:15"

    def test_ineligible_tasks_do_not_block(self, today, config):
        existing = [
            daily("a", "09:00"),
            once("elsewhere", "10:00", on="2026-10-22"),
        ]
        report = detect_conflicts(daily("b", "09:00"), existing, reference_date=today, config=config)
        assert report.suggested_start == "10:00"

    def test_all_probes_blocked_returns_original(self, today, config):
        existing = [daily("a", "08:00", "20:30")]
        report = detect_conflicts(daily("b", "08:00"), existing, reference_date=today, config=config)
        assert report.has_conflicts is True
        assert report.suggested_start == "08:00"

    def test_search_stops_at_midnight(self, today, config):
        existing = [daily("a", "23:00", "24:00")]
        report = detect_conflicts(daily("b", "23:00"), existing, reference_date=today, config=config)
        assert report.suggested_start == "23:00"

    @pytest.mark.parametrize(
        ("start", "expected"),
        [("09:00", "10:00"), ("09:30", "10:00"), ("08:30", "10:00")],
    )
    def test_probes_assume_default_duration(self, today, config, start, expected):
        existing = [daily("a", "09:00", "10:00")]
        assert find_next_available_start(daily("b", start), existing, today, config) == expected
