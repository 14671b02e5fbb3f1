from __future__ import annotations

from typing import Tuple

from ..models.config import TimetableConfig

LUNCH_MINUTES = 30


def _label(total_minutes: int) -> str:
    # Wraps past midnight instead of printing hour 24+
    hours = (total_minutes // 60) % 24
    return f"{hours:02d}:{total_minutes % 60:02d}"


def period_start_minutes(period: int, config: TimetableConfig) -> int:
    total = config.start_minutes()
    for i in range(period):
        total += config.period_duration
        if i == config.lunch_break_period - 1:
            total += LUNCH_MINUTES
    return total


def time_range_for_period(period: int, config: TimetableConfig) -> Tuple[str, str]:
    start = period_start_minutes(period, config)
    return _label(start), _label(start + config.period_duration)


def format_time_range(period: int, config: TimetableConfig) -> str:
    start, end = time_range_for_period(period, config)
    return f"{start} - {end}"


def lunch_range(config: TimetableConfig) -> Tuple[str, str]:
    """Lunch window, which follows period ``lunch_break_period`` (1-based)."""
    start = config.start_minutes() + config.lunch_break_period * config.period_duration
    return _label(start), _label(start + LUNCH_MINUTES)
