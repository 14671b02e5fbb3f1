from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..data.catalog import Catalog
from ..models.config import DAYS, TimetableConfig
from ..models.conflict import (
    CONFLICT_KINDS,
    HOURS_EXCEEDED,
    LAB_SPLIT,
    TEACHER_DOUBLE_BOOKING,
    Conflict,
)
from ..models.timetable import Timetable
from ..scheduler.placement import hours_placed


DEFAULT_RULES = (TEACHER_DOUBLE_BOOKING,)
ALL_RULES = CONFLICT_KINDS


def teacher_double_bookings(tt: Timetable, catalog: Catalog, config: TimetableConfig) -> List[Conflict]:
    """One conflict per (period, teacher) holding more than one slot across the week."""
    out: List[Conflict] = []
    for period in range(config.periods_per_day):
        by_teacher: Dict[str, List[str]] = defaultdict(list)
        for s in tt.slots_for_period(period):
            if s.subject_id is None:
                continue
            subject = catalog.subjects.get(s.subject_id)
            if subject is None:
                continue
            by_teacher[subject.teacher_id].append(s.id)
        for teacher_id in sorted(by_teacher):
            slot_ids = by_teacher[teacher_id]
            if len(slot_ids) > 1:
                teacher = catalog.teachers.get(teacher_id)
                name = teacher.name if teacher else "Teacher"
                out.append(
                    Conflict(
                        TEACHER_DOUBLE_BOOKING,
                        f"{name} is scheduled in multiple classes at the same time",
                        tuple(slot_ids),
                    )
                )
    return out


def lab_splits(tt: Timetable, catalog: Catalog, config: TimetableConfig) -> List[Conflict]:
    # A run of lab periods shorter than lab_duration is a split session.
    # Runs do not continue across the lunch break.
    out: List[Conflict] = []
    for subject_id in sorted(catalog.subjects):
        subject = catalog.subjects[subject_id]
        if not subject.is_lab:
            continue
        for day in range(len(DAYS)):
            runs: List[List[str]] = []
            prev: int | None = None
            for s in tt.slots_for_day(day):
                if s.subject_id != subject_id:
                    prev = None
                    continue
                if prev is not None and s.period == prev + 1 and s.period != config.lunch_break_period:
                    runs[-1].append(s.id)
                else:
                    runs.append([s.id])
                prev = s.period
            for run in runs:
                if len(run) < subject.lab_duration:
                    out.append(
                        Conflict(
                            LAB_SPLIT,
                            f"{subject.name} lab needs {subject.lab_duration} consecutive periods on {DAYS[day]}",
                            tuple(run),
                        )
                    )
    return out


def hours_exceeded(tt: Timetable, catalog: Catalog, config: TimetableConfig) -> List[Conflict]:
    placed = hours_placed(tt.all())
    out: List[Conflict] = []
    for subject_id in sorted(catalog.subjects):
        subject = catalog.subjects[subject_id]
        n = placed.get(subject_id, 0)
        if n > subject.hours_per_week:
            out.append(
                Conflict(
                    HOURS_EXCEEDED,
                    f"{subject.name} is placed {n} times for {subject.hours_per_week} hours/week",
                    tuple(s.id for s in tt.all() if s.subject_id == subject_id),
                )
            )
    return out


RULES = {
    TEACHER_DOUBLE_BOOKING: teacher_double_bookings,
    LAB_SPLIT: lab_splits,
    HOURS_EXCEEDED: hours_exceeded,
}


def detect_conflicts(
    tt: Timetable,
    catalog: Catalog,
    config: TimetableConfig,
    rules: Sequence[str] = DEFAULT_RULES,
) -> List[Conflict]:
    """Recompute conflicts from scratch; same grid and catalog give the same list."""
    unknown = set(rules) - set(RULES)
    if unknown:
        raise ValueError(f"unknown conflict rules: {sorted(unknown)}")
    conflicts: List[Conflict] = []
    for kind in ALL_RULES:
        if kind in rules:
            conflicts.extend(RULES[kind](tt, catalog, config))
    return conflicts
