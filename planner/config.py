"""
Centralized scheduling configuration for the daily planner.

Values load from config/planner.yaml (override the path with PLANNER_CONFIG).
A missing or broken file falls back to the built-in defaults below.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from planner import paths
from planner.time_utils import MINUTES_PER_DAY, is_valid_time, to_time_string

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULTS
# =============================================================================

_DEFAULT_WORKING_START = "07:00"
_DEFAULT_WORKING_END = "23:00"
_DEFAULT_SLOT_MINUTES = 60
_DEFAULT_DURATION_MINUTES = 60
_DEFAULT_STEP_MINUTES = 30
_DEFAULT_MAX_PROBES = 24

DAILY_MATCH_EXACT = "exact"
DAILY_MATCH_WEEKDAY_OVERLAP = "weekday_overlap"
_DAILY_MATCH_MODES = (DAILY_MATCH_EXACT, DAILY_MATCH_WEEKDAY_OVERLAP)


@dataclass(frozen=True)
class FixedBlock:
    """A virtual occupied block (sleep, morning routine)."""

    name: str
    start: str
    end: str


_DEFAULT_FIXED_BLOCKS = (
    FixedBlock("sleep_late", "23:00", "24:00"),
    FixedBlock("sleep_early", "00:00", "06:00"),
    FixedBlock("morning_routine", "06:00", "07:00"),
)


def _clock_time(value, key: str) -> str:
    """
    Normalize a wall-clock value from YAML.

    YAML 1.1 reads an unquoted 23:00 as the base-60 integer 1380, so ints
    in [0, 1440] are turned back into "HH:MM" (1440 is "24:00").
    """
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MINUTES_PER_DAY:
        value = "24:00" if value == MINUTES_PER_DAY else to_time_string(value)
    if not is_valid_time(value):
        raise ValueError(f"{key} must be an HH:MM time, got {value!r}")
    return value


@dataclass(frozen=True)
class PlannerConfig:
    working_start: str = _DEFAULT_WORKING_START
    working_end: str = _DEFAULT_WORKING_END
    fixed_blocks: tuple[FixedBlock, ...] = field(default=_DEFAULT_FIXED_BLOCKS)
    slot_minutes: int = _DEFAULT_SLOT_MINUTES
    default_duration_minutes: int = _DEFAULT_DURATION_MINUTES
    suggestion_step_minutes: int = _DEFAULT_STEP_MINUTES
    suggestion_max_probes: int = _DEFAULT_MAX_PROBES
    daily_match: str = DAILY_MATCH_EXACT

    @classmethod
    def from_dict(cls, data: dict) -> "PlannerConfig":
        """Build from the YAML document shape; missing keys keep defaults."""
        window = data.get("working_window", {})
        suggestion = data.get("suggestion", {})
        conflicts = data.get("conflicts", {})

        blocks = _DEFAULT_FIXED_BLOCKS
        if "fixed_blocks" in data:
            blocks = tuple(
                FixedBlock(
                    name=b.get("name", f"block_{i}"),
                    start=_clock_time(b["start"], f"fixed_blocks[{i}].start"),
                    end=_clock_time(b["end"], f"fixed_blocks[{i}].end"),
                )
                for i, b in enumerate(data["fixed_blocks"] or [])
            )

        daily_match = conflicts.get("daily_match", DAILY_MATCH_EXACT)
        if daily_match not in _DAILY_MATCH_MODES:
            raise ValueError(
                f"conflicts.daily_match must be one of {_DAILY_MATCH_MODES}, got {daily_match!r}"
            )

        return cls(
            working_start=_clock_time(
                window.get("start", _DEFAULT_WORKING_START), "working_window.start"
            ),
            working_end=_clock_time(window.get("end", _DEFAULT_WORKING_END), "working_window.end"),
            fixed_blocks=blocks,
            slot_minutes=int(data.get("slot_minutes", _DEFAULT_SLOT_MINUTES)),
            default_duration_minutes=int(
                data.get("default_duration_minutes", _DEFAULT_DURATION_MINUTES)
            ),
            suggestion_step_minutes=int(suggestion.get("step_minutes", _DEFAULT_STEP_MINUTES)),
            suggestion_max_probes=int(suggestion.get("max_probes", _DEFAULT_MAX_PROBES)),
            daily_match=daily_match,
        )


def _load_yaml(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.warning("Planner config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load planner config: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Planner config at %s is not a mapping, using defaults", config_path)
        return {}
    return data


def load_config(config_path: Path | None = None) -> PlannerConfig:
    """Load scheduling config from YAML (defaults to paths.config_path())."""
    if config_path is None:
        config_path = paths.config_path()
    try:
        return PlannerConfig.from_dict(_load_yaml(config_path))
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Invalid planner config at %s: %s; using defaults", config_path, exc)
        return PlannerConfig()


@lru_cache(maxsize=1)
def get_config() -> PlannerConfig:
    """Process-wide config, loaded once."""
    return load_config()


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    get_config.cache_clear()
