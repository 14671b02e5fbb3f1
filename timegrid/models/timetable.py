from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from ..errors import NotFoundError
from .config import DAYS, TimetableConfig
from .slot import TimetableSlot


Key = Tuple[int, int]  # (day, period)


def initialize(config: TimetableConfig) -> List[TimetableSlot]:
    """Every (day, period) cell for ``config``, all empty, day-major order."""
    return [
        TimetableSlot.empty(day, period)
        for day in range(len(DAYS))
        for period in range(config.periods_per_day)
    ]


@dataclass
class Timetable:
    periods_per_day: int
    cells: Dict[Key, TimetableSlot] = field(default_factory=dict)

    @classmethod
    def for_config(cls, config: TimetableConfig) -> "Timetable":
        tt = cls(config.periods_per_day)
        tt.reset()
        return tt

    def reset(self) -> None:
        # Full reset: placements are not carried over.
        self.cells = {
            (day, period): TimetableSlot.empty(day, period)
            for day in range(len(DAYS))
            for period in range(self.periods_per_day)
        }

    def replace_all(self, slots: Iterable[TimetableSlot]) -> None:
        """Swap in a new set of slots, filling any missing coordinate with an empty slot.

        Slots whose coordinates fall outside the grid are ignored.
        """
        incoming: Dict[Key, TimetableSlot] = {}
        for s in slots:
            if 0 <= s.day < len(DAYS) and 0 <= s.period < self.periods_per_day:
                incoming.setdefault(s.key, s)
        self.reset()
        for key, s in incoming.items():
            self.cells[key] = TimetableSlot.empty(*key).with_subject(s.subject_id)

    def get(self, day: int, period: int) -> TimetableSlot | None:
        return self.cells.get((day, period))

    def by_id(self, slot_id: str) -> TimetableSlot:
        try:
            day_s, period_s = slot_id.split("-")
            s = self.cells.get((int(day_s), int(period_s)))
        except (AttributeError, ValueError):
            s = None
        # Only canonical "{day}-{period}" ids; "01-2" or " 1-2" do not match
        if s is None or s.id != slot_id:
            raise NotFoundError(f"unknown slot {slot_id!r}")
        return s

    def assign(self, slot_id: str, subject_id: str | None) -> TimetableSlot:
        s = self.by_id(slot_id).with_subject(subject_id)
        self.cells[s.key] = s
        return s

    def clear_subject(self, subject_id: str) -> List[str]:
        cleared: List[str] = []
        for key, s in self.cells.items():
            if s.subject_id == subject_id:
                self.cells[key] = s.with_subject(None)
                cleared.append(s.id)
        return cleared

    def all(self) -> List[TimetableSlot]:
        return [self.cells[k] for k in sorted(self.cells)]

    def occupied(self) -> Iterable[TimetableSlot]:
        for s in self.all():
            if s.subject_id is not None:
                yield s

    def slots_for_period(self, period: int) -> List[TimetableSlot]:
        return [s for s in self.all() if s.period == period]

    def slots_for_day(self, day: int) -> List[TimetableSlot]:
        return [s for s in self.all() if s.day == day]

    def __len__(self) -> int:
        return len(self.cells)
