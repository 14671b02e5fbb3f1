from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable

from ..models.slot import TimetableSlot
from ..models.timetable import Timetable


logger = logging.getLogger(__name__)


def click_target(current: str | None, selected: str | None) -> str | None:
    """Subject a slot should hold after a click.

    With no selection a click clears the slot. With a selection, an empty slot
    takes it, the same subject toggles off, and a different subject is left
    alone: clicks never overwrite.
    """
    if selected is None:
        return None
    if current is None:
        return selected
    if current == selected:
        return None
    return current


def click_slot(tt: Timetable, slot_id: str, selected: str | None) -> TimetableSlot:
    s = tt.by_id(slot_id)
    target = click_target(s.subject_id, selected)
    if target == s.subject_id:
        logger.debug(f"Click {slot_id}: kept {s.subject_id}")
        return s
    logger.info(f"Click {slot_id}: {s.subject_id} -> {target}")
    return tt.assign(slot_id, target)


def drop_on_slot(tt: Timetable, slot_id: str, subject_id: str | None) -> TimetableSlot:
    # Drops always overwrite, whatever the slot holds and whatever is selected
    s = tt.assign(slot_id, subject_id)
    logger.info(f"Drop {slot_id} -> {subject_id}")
    return s


def hours_placed(slots: Iterable[TimetableSlot]) -> Dict[str, int]:
    return dict(Counter(s.subject_id for s in slots if s.subject_id is not None))


def remaining_hours(quotas: Dict[str, int], placed: Dict[str, int]) -> Dict[str, int]:
    # Negative means over quota; over-placement is allowed and only reported
    return {sid: q - placed.get(sid, 0) for sid, q in quotas.items()}
