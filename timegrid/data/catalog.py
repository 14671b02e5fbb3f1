from __future__ import annotations

import logging
import random
import string
from typing import Dict, List

from ..errors import DataFileError, NotFoundError, ValidationError
from ..models.subject import LAB_DURATIONS, SUBJECT_COLORS, Subject
from ..models.teacher import Teacher


logger = logging.getLogger(__name__)

_ID_CHARS = string.ascii_lowercase + string.digits


def generate_id(taken: set[str] | None = None, rng: random.Random | None = None) -> str:
    r = rng or random
    while True:
        candidate = "".join(r.choice(_ID_CHARS) for _ in range(7))
        if not taken or candidate not in taken:
            return candidate


class Catalog:
    """Teachers and the subjects they teach, keyed by id.

    Subjects point at teachers by id only. Removing a teacher removes its
    subjects; callers are handed back the removed subject ids so they can clear
    any slot that still references them.
    """

    def __init__(self, data: Dict[str, object] | None = None):
        self.teachers: Dict[str, Teacher] = {}
        self.subjects: Dict[str, Subject] = {}
        data = data or {}
        try:
            self._load(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise DataFileError(f"malformed catalog data: {e!r}") from e

    def _load(self, data: Dict[str, object]) -> None:
        for t in data.get("teachers", []):  # type: ignore[union-attr]
            self.teachers[t["id"]] = Teacher(id=t["id"], name=t["name"])
        for s in data.get("subjects", []):  # type: ignore[union-attr]
            teacher_id = s.get("teacherId", s.get("teacher_id"))
            is_lab = bool(s.get("isLab", s.get("is_lab", False)))
            subject = self._build_subject(
                s["id"],
                s["name"],
                teacher_id,
                s.get("hoursPerWeek", s.get("hours_per_week", 1)),
                is_lab,
                s.get("labDuration", s.get("lab_duration", 2)),
                color=s.get("color"),
            )
            self.subjects[subject.id] = subject

    def _ids(self) -> set[str]:
        return set(self.teachers) | set(self.subjects)

    def _build_subject(
        self,
        subject_id: str,
        name: str,
        teacher_id: str | None,
        hours_per_week: object,
        is_lab: bool,
        lab_duration: object,
        color: str | None = None,
    ) -> Subject:
        if not name or not str(name).strip():
            raise ValidationError("subject name must not be empty")
        if teacher_id not in self.teachers:
            raise ValidationError(f"subject {name!r} references unknown teacher {teacher_id!r}")
        try:
            hours = int(hours_per_week)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise ValidationError(f"hours per week must be an integer, got {hours_per_week!r}") from None
        if hours < 1:
            raise ValidationError(f"hours per week must be positive, got {hours}")
        duration = lab_duration if is_lab else 2
        if duration not in LAB_DURATIONS:
            raise ValidationError(f"lab duration must be 2 or 3 periods, got {lab_duration!r}")
        if color is None:
            color = SUBJECT_COLORS[len(self.subjects) % len(SUBJECT_COLORS)]
        return Subject(
            id=subject_id,
            name=str(name).strip(),
            teacher_id=teacher_id,  # type: ignore[arg-type]
            hours_per_week=hours,
            is_lab=is_lab,
            lab_duration=int(duration),  # type: ignore[arg-type]
            color=color,
        )

    def add_teacher(self, name: str) -> Teacher:
        if not name or not name.strip():
            raise ValidationError("teacher name must not be empty")
        t = Teacher(id=generate_id(self._ids()), name=name.strip())
        self.teachers[t.id] = t
        logger.info(f"Added teacher {t.name} ({t.id})")
        return t

    def remove_teacher(self, teacher_id: str) -> List[str]:
        """Drop a teacher and its subjects; returns the removed subject ids."""
        if self.teachers.pop(teacher_id, None) is None:
            logger.debug(f"Remove teacher {teacher_id}: not in catalog")
            return []
        removed = [sid for sid, s in self.subjects.items() if s.teacher_id == teacher_id]
        for sid in removed:
            del self.subjects[sid]
        logger.info(f"Removed teacher {teacher_id} and {len(removed)} subject(s)")
        return removed

    def add_subject(
        self,
        name: str,
        teacher_id: str,
        hours_per_week: int,
        is_lab: bool = False,
        lab_duration: int = 2,
    ) -> Subject:
        subject = self._build_subject(
            generate_id(self._ids()), name, teacher_id, hours_per_week, is_lab, lab_duration
        )
        self.subjects[subject.id] = subject
        logger.info(f"Added subject {subject.name} ({subject.id}) for teacher {teacher_id}")
        return subject

    def remove_subject(self, subject_id: str) -> bool:
        if self.subjects.pop(subject_id, None) is None:
            logger.debug(f"Remove subject {subject_id}: not in catalog")
            return False
        logger.info(f"Removed subject {subject_id}")
        return True

    def teacher(self, teacher_id: str) -> Teacher:
        try:
            return self.teachers[teacher_id]
        except KeyError:
            raise NotFoundError(f"unknown teacher {teacher_id!r}") from None

    def subject(self, subject_id: str) -> Subject:
        try:
            return self.subjects[subject_id]
        except KeyError:
            raise NotFoundError(f"unknown subject {subject_id!r}") from None

    def teacher_of(self, subject_id: str) -> Teacher | None:
        s = self.subjects.get(subject_id)
        if s is None:
            return None
        return self.teachers.get(s.teacher_id)

    def to_dict(self) -> Dict[str, object]:
        return {
            "teachers": [{"id": t.id, "name": t.name} for t in self.teachers.values()],
            "subjects": [s.to_dict() for s in self.subjects.values()],
        }
