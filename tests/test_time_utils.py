"""Tests for wall-clock minute arithmetic."""

import pytest

from planner.time_utils import (
    MINUTES_PER_DAY,
    end_minutes,
    is_valid_time,
    overlaps,
    to_minutes,
    to_time_string,
)


class TestToMinutes:
    def test_midnight(self):
        assert to_minutes("00:00") == 0

    def test_half_past_nine(self):
        assert to_minutes("09:30") == 570

    def test_end_of_day(self):
        assert to_minutes("24:00") == MINUTES_PER_DAY

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            to_minutes("noon")


class TestToTimeString:
    def test_zero_padded(self):
        assert to_time_string(65) == "01:05"

    def test_round_trip(self):
        assert to_time_string(to_minutes("17:45")) == "17:45"

    def test_midnight_wraps(self):
        assert to_time_string(MINUTES_PER_DAY) == "00:00"

    def test_past_midnight_wraps(self):
        assert to_time_string(1470) == "00:30"


class TestEndMinutes:
    def test_explicit_end(self):
        assert end_minutes("09:00", "09:45") == 585

    def test_missing_end_defaults_to_an_hour(self):
        assert end_minutes("09:00", None) == 600

    def test_custom_default_duration(self):
        assert end_minutes("09:00", None, default_duration=30) == 570

    def test_late_start_runs_past_midnight(self):
        assert end_minutes("23:30", None) == 1470


class TestOverlaps:
    def test_intersecting(self):
        assert overlaps(540, 600, 570, 630) is True

    def test_touching_is_not_overlap(self):
        assert overlaps(540, 600, 600, 660) is False

    def test_contained(self):
        assert overlaps(540, 720, 600, 660) is True

    def test_symmetric(self):
        assert overlaps(570, 630, 540, 600) == overlaps(540, 600, 570, 630)

    def test_disjoint(self):
        assert overlaps(0, 60, 120, 180) is False


class TestIsValidTime:
    @pytest.mark.parametrize("value", ["00:00", "09:05", "23:59", "24:00"])
    def test_valid(self, value):
        assert is_valid_time(value) is True

    @pytest.mark.parametrize("value", ["9:05", "24:01", "25:00", "12:60", "12-30", "", None, 930])
    def test_invalid(self, value):
        assert is_valid_time(value) is False
