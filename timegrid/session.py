from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .data.catalog import Catalog
from .errors import NotFoundError
from .models.config import TimetableConfig, validate_config
from .models.conflict import Conflict
from .models.slot import TimetableSlot
from .models.subject import Subject
from .models.teacher import Teacher
from .models.timetable import Timetable
from .render.csv_out import ResolvedRow, resolve_rows
from .scheduler.placement import click_slot, drop_on_slot, hours_placed, remaining_hours
from .scheduler.prompt import build_generation_prompt
from .scheduler.repair import RepairNote, extract_slot_array, sanitize_slots
from .validate.checks import DEFAULT_RULES, detect_conflicts


logger = logging.getLogger(__name__)


class TimetableSession:
    """One editable weekly schedule.

    Owns the catalog, the configuration, the slot grid and the selected-subject
    cursor. Every method is synchronous; conflicts and hour tallies are derived
    on each call and never cached. A multi-client host must serialise calls per
    session.
    """

    def __init__(
        self,
        config: TimetableConfig | Mapping[str, Any] | None = None,
        catalog: Catalog | None = None,
    ):
        self.config = validate_config(config or TimetableConfig())
        self.catalog = catalog or Catalog()
        self.timetable = Timetable.for_config(self.config)
        self.selected_subject_id: str | None = None
        self.last_repairs: List[RepairNote] = []

    # Catalog

    def create_teacher(self, name: str) -> Teacher:
        return self.catalog.add_teacher(name)

    def delete_teacher(self, teacher_id: str) -> None:
        for subject_id in self.catalog.remove_teacher(teacher_id):
            self._forget_subject(subject_id)

    def create_subject(
        self,
        name: str,
        teacher_id: str,
        hours_per_week: int,
        is_lab: bool = False,
        lab_duration: int = 2,
    ) -> Subject:
        return self.catalog.add_subject(name, teacher_id, hours_per_week, is_lab, lab_duration)

    def delete_subject(self, subject_id: str) -> None:
        if self.catalog.remove_subject(subject_id):
            self._forget_subject(subject_id)

    def _forget_subject(self, subject_id: str) -> None:
        cleared = self.timetable.clear_subject(subject_id)
        if cleared:
            logger.info(f"Cleared {len(cleared)} slot(s) of removed subject {subject_id}")
        if self.selected_subject_id == subject_id:
            self.selected_subject_id = None

    # Grid

    def set_configuration(self, config: TimetableConfig | Mapping[str, Any]) -> List[TimetableSlot]:
        """Validate and apply a new shape; the grid is rebuilt empty."""
        self.config = validate_config(config)
        self.timetable = Timetable.for_config(self.config)
        logger.info(f"Configuration set: {self.config}")
        return self.slots

    def clear(self) -> List[TimetableSlot]:
        self.timetable.reset()
        return self.slots

    @property
    def slots(self) -> List[TimetableSlot]:
        return self.timetable.all()

    # Placement

    def _require_subject(self, subject_id: str | None) -> None:
        if subject_id is not None and subject_id not in self.catalog.subjects:
            raise NotFoundError(f"unknown subject {subject_id!r}")

    def select_subject(self, subject_id: str | None) -> None:
        self._require_subject(subject_id)
        self.selected_subject_id = subject_id

    def place_subject(self, slot_id: str, subject_id: str | None) -> TimetableSlot:
        """Click ``slot_id`` as if ``subject_id`` were the selected subject."""
        self._require_subject(subject_id)
        return click_slot(self.timetable, slot_id, subject_id)

    def click_slot(self, slot_id: str) -> TimetableSlot:
        return click_slot(self.timetable, slot_id, self.selected_subject_id)

    def drop_subject(self, slot_id: str, subject_id: str | None) -> TimetableSlot:
        self._require_subject(subject_id)
        return drop_on_slot(self.timetable, slot_id, subject_id)

    # Generator boundary

    def accept_generated_schedule(self, raw_slots: Iterable[Dict[str, Any]]) -> List[TimetableSlot]:
        slots, repairs = sanitize_slots(raw_slots, self.config, set(self.catalog.subjects))
        self.timetable.replace_all(slots)
        self.last_repairs = repairs
        logger.info(f"Accepted generated schedule with {len(repairs)} repair(s)")
        return self.slots

    def accept_generated_reply(self, text: str) -> List[TimetableSlot]:
        return self.accept_generated_schedule(extract_slot_array(text))

    def generation_prompt(self) -> str:
        return build_generation_prompt(self.catalog, self.config)

    # Derived views

    def get_conflicts(self, rules: Sequence[str] = DEFAULT_RULES) -> List[Conflict]:
        return detect_conflicts(self.timetable, self.catalog, self.config, rules)

    def get_hours_placed(self) -> Dict[str, int]:
        return hours_placed(self.timetable.all())

    def get_remaining_hours(self) -> Dict[str, int]:
        quotas = {sid: s.hours_per_week for sid, s in self.catalog.subjects.items()}
        return remaining_hours(quotas, self.get_hours_placed())

    def resolved_rows(self) -> List[ResolvedRow]:
        return resolve_rows(self.timetable, self.catalog, self.config)
