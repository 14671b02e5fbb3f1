from __future__ import annotations

from typing import List

from ..data.catalog import Catalog
from ..models.config import DAYS, TimetableConfig


SYSTEM_PROMPT = "You are a precise timetable scheduling algorithm. Output only valid JSON."


def build_generation_prompt(catalog: Catalog, config: TimetableConfig) -> str:
    """Request text for the external generator.

    The reply is untrusted; it goes through ``sanitize_slots`` before use.
    """
    last = config.periods_per_day - 1
    teachers = [f"- {t.name} (ID: {t.id})" for t in catalog.teachers.values()]
    subjects: List[str] = []
    for s in catalog.subjects.values():
        teacher = catalog.teachers.get(s.teacher_id)
        line = f"- {s.name} (ID: {s.id}): {s.hours_per_week} hours/week, Teacher: {teacher.name if teacher else ''}"
        if s.is_lab:
            line += f", LAB ({s.lab_duration} consecutive periods)"
        subjects.append(line)
    lab_lengths = " or ".join(str(s.lab_duration) for s in catalog.subjects.values() if s.is_lab)
    total = len(DAYS) * config.periods_per_day

    lines = [
        "You are a college timetable scheduler. Generate an optimal timetable based on these constraints:",
        "",
        "TEACHERS:",
        *teachers,
        "",
        "SUBJECTS:",
        *subjects,
        "",
        "CONFIGURATION:",
        f"- Days: {DAYS[0]} to {DAYS[-1]} (0-{len(DAYS) - 1})",
        f"- Periods per day: {config.periods_per_day} (indexed 0-{last})",
        f"- Lunch break after period: {config.lunch_break_period}",
        "",
        "CONSTRAINTS:",
        "1. Each subject must be scheduled for exactly its specified hours per week",
        f"2. Labs must be scheduled as {lab_lengths or 'n/a'} consecutive periods",
        "3. A teacher cannot teach two classes at the same time",
        "4. Distribute subjects evenly across the week (avoid putting all hours on one day)",
        "5. Avoid scheduling the same subject twice on the same day unless necessary",
        "",
        "Return ONLY a valid JSON array of slot assignments. Each slot has:",
        '- id: "{day}-{period}" format (e.g., "0-0" for Monday period 1)',
        "- subjectId: the subject ID or null for empty",
        f"- day: 0-{len(DAYS) - 1}",
        f"- period: 0-{last}",
        "- isLunchBreak: false",
        "",
        f"Generate ALL {total} slots for the complete timetable. Return ONLY the JSON array, no explanation.",
    ]
    return "\n".join(lines)
