"""
Time Utilities — wall-clock minute arithmetic.

All scheduling math works on integer minutes since local midnight.
Stored/displayed times are zero-padded "HH:MM" strings.
"""

import logging
import re

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# "24:00" is accepted so a block can end exactly at midnight
TIME_REGEX = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$|^24:00$")


def is_valid_time(value: str) -> bool:
    """Check a string is a zero-padded HH:MM wall-clock time."""
    return isinstance(value, str) and bool(TIME_REGEX.match(value))


def to_minutes(value: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Input is trusted: callers validate at the boundary. Text that cannot be
    split into two integers raises ValueError.
    """
    hours, minutes = value.split(":")
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def to_time_string(minutes: int) -> str:
    """
    Convert minutes since midnight to "HH:MM".

    Values past midnight wrap onto the next day's wall clock
    (1470 -> "00:30").
    """
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def end_minutes(start: str, end: str | None, default_duration: int = 60) -> int:
    """End of a [start, end) window; a missing end means start + default_duration."""
    if end:
        return to_minutes(end)
    return to_minutes(start) + default_duration


def overlaps(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Half-open interval intersection; touching endpoints do not overlap."""
    return start1 < end2 and start2 < end1
