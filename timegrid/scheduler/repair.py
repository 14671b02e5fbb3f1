from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Collection, Dict, Iterable, List, Tuple

from ..models.config import DAYS, TimetableConfig
from ..models.slot import TimetableSlot, slot_id_for


logger = logging.getLogger(__name__)

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


@dataclass(frozen=True)
class RepairNote:
    slot_id: str
    reason: str

    def __str__(self) -> str:
        return f"{self.slot_id}: {self.reason}"


def extract_slot_array(text: str) -> List[Dict[str, Any]]:
    """Pull the JSON slot array out of a free-text generator reply.

    Returns an empty list when no array can be parsed; the caller then fills
    the grid with empty slots.
    """
    m = _ARRAY_RE.search(text or "")
    if not m:
        logger.warning("Generator reply holds no JSON array")
        return []
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Generator reply is not valid JSON: {e}")
        return []
    if not isinstance(data, list):
        return []
    return [d for d in data if isinstance(d, dict)]


def _coords(raw: Dict[str, Any]) -> Tuple[int, int] | None:
    day, period = raw.get("day"), raw.get("period")
    if day is None or period is None:
        # Fall back to the "{day}-{period}" id
        rid = raw.get("id")
        if not isinstance(rid, str) or "-" not in rid:
            return None
        day, period = rid.split("-", 1)
    # Whole numbers or digit strings only; floats and bools are not coordinates
    if not all(isinstance(v, (int, str)) and not isinstance(v, bool) for v in (day, period)):
        return None
    try:
        return int(day), int(period)
    except (TypeError, ValueError, OverflowError):
        return None


def sanitize_slots(
    raw_slots: Iterable[Dict[str, Any]],
    config: TimetableConfig,
    known_subjects: Collection[str],
) -> Tuple[List[TimetableSlot], List[RepairNote]]:
    """Turn an untrusted slot array into a complete, valid grid.

    - entries with unreadable or out-of-grid coordinates are dropped
    - the first entry for a coordinate wins, later duplicates are dropped
    - subject ids not in ``known_subjects`` are nulled
    - coordinates nobody supplied are filled with empty slots
    """
    notes: List[RepairNote] = []
    accepted: Dict[Tuple[int, int], TimetableSlot] = {}
    for raw in raw_slots:
        if not isinstance(raw, dict):
            notes.append(RepairNote("?", "entry is not an object"))
            continue
        coords = _coords(raw)
        if coords is None:
            notes.append(RepairNote(str(raw.get("id", "?")), "unreadable coordinates"))
            continue
        day, period = coords
        sid = slot_id_for(day, period)
        if not (0 <= day < len(DAYS) and 0 <= period < config.periods_per_day):
            notes.append(RepairNote(sid, "outside the grid"))
            continue
        if coords in accepted:
            notes.append(RepairNote(sid, "duplicate coordinate"))
            continue
        subject_id = raw.get("subjectId", raw.get("subject_id"))
        if subject_id is not None and (not isinstance(subject_id, str) or subject_id not in known_subjects):
            notes.append(RepairNote(sid, f"unknown subject {subject_id!r} cleared"))
            subject_id = None
        accepted[coords] = TimetableSlot(sid, day, period, subject_id)

    for n in notes:
        logger.warning(f"Repair {n}")

    slots: List[TimetableSlot] = []
    filled = 0
    for day in range(len(DAYS)):
        for period in range(config.periods_per_day):
            s = accepted.get((day, period))
            if s is None:
                s = TimetableSlot.empty(day, period)
                notes.append(RepairNote(s.id, "missing, filled empty"))
                filled += 1
            slots.append(s)
    if filled:
        logger.info(f"Filled {filled} missing slot(s) with empty cells")
    return slots, notes
