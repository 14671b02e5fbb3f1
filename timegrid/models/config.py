from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

from ..errors import ValidationError


DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
ALLOWED_PERIODS = (6, 7, 8, 9)
MIN_PERIOD_MINUTES = 30
MAX_PERIOD_MINUTES = 90

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

# camelCase keys as produced by the web client and the generator
_ALIASES = {
    "periodsPerDay": "periods_per_day",
    "lunchBreakPeriod": "lunch_break_period",
    "startTime": "start_time",
    "periodDuration": "period_duration",
}


@dataclass(frozen=True)
class TimetableConfig:
    periods_per_day: int = 8
    lunch_break_period: int = 4  # lunch is inserted after this 1-based period
    start_time: str = "09:00"
    period_duration: int = 50  # minutes

    @property
    def slot_count(self) -> int:
        return len(DAYS) * self.periods_per_day

    def start_minutes(self) -> int:
        h, m = parse_clock(self.start_time)
        return h * 60 + m


def parse_clock(value: str) -> tuple[int, int]:
    m = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"start time must be HH:MM, got {value!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"start time out of range: {value!r}")
    return hours, minutes


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer, got {value!r}") from None


def validate_config(config: TimetableConfig | Mapping[str, Any]) -> TimetableConfig:
    """Check a schedule shape and return it as a ``TimetableConfig``.

    Accepts an existing config or a mapping using either snake_case or the
    camelCase keys of the web client. Missing keys take the defaults. Raises
    ``ValidationError`` on the first bad field; nothing else is touched.
    """
    if isinstance(config, TimetableConfig):
        raw: Dict[str, Any] = {f.name: getattr(config, f.name) for f in fields(config)}
    else:
        raw = {}
        known = {f.name for f in fields(TimetableConfig)}
        for key, value in config.items():
            name = _ALIASES.get(key, key)
            if name in known:
                raw[name] = value
        defaults = TimetableConfig()
        for name in known:
            raw.setdefault(name, getattr(defaults, name))

    periods = _as_int("periods_per_day", raw["periods_per_day"])
    if periods not in ALLOWED_PERIODS:
        raise ValidationError(
            f"periods_per_day must be one of {list(ALLOWED_PERIODS)}, got {periods}"
        )
    lunch = _as_int("lunch_break_period", raw["lunch_break_period"])
    if not 1 <= lunch <= periods - 1:
        raise ValidationError(
            f"lunch_break_period must be between 1 and {periods - 1}, got {lunch}"
        )
    duration = _as_int("period_duration", raw["period_duration"])
    if not MIN_PERIOD_MINUTES <= duration <= MAX_PERIOD_MINUTES:
        raise ValidationError(
            f"period_duration must be between {MIN_PERIOD_MINUTES} and "
            f"{MAX_PERIOD_MINUTES} minutes, got {duration}"
        )
    h, m = parse_clock(raw["start_time"])
    return TimetableConfig(
        periods_per_day=periods,
        lunch_break_period=lunch,
        start_time=f"{h:02d}:{m:02d}",
        period_duration=duration,
    )
