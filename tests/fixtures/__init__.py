"""
Test fixtures for deterministic testing.

This module provides:
- task factories (daily, once, flexible) with sensible defaults
- MONDAY / SATURDAY / SUNDAY: pinned reference dates
"""

from .tasks import MONDAY, SATURDAY, SUNDAY, daily, flexible, once

__all__ = ["MONDAY", "SATURDAY", "SUNDAY", "daily", "flexible", "once"]
