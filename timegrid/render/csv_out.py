from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..data.catalog import Catalog
from ..models.config import DAYS, TimetableConfig
from ..models.timetable import Timetable
from ..scheduler.timing import lunch_range, time_range_for_period


HEADER = "Day,Period,PeriodStart,PeriodEnd,Subject,Teacher,Lab"


@dataclass(frozen=True)
class ResolvedRow:
    slot_id: str
    day: str
    period: int
    start: str
    end: str
    subject: str
    teacher: str
    is_lab: bool
    color: str | None


def resolve_rows(tt: Timetable, catalog: Catalog, config: TimetableConfig) -> List[ResolvedRow]:
    """Join each slot with its subject, teacher and time labels, day-major."""
    rows: List[ResolvedRow] = []
    for s in tt.all():
        start, end = time_range_for_period(s.period, config)
        subject = catalog.subjects.get(s.subject_id) if s.subject_id else None
        teacher = catalog.teachers.get(subject.teacher_id) if subject else None
        rows.append(
            ResolvedRow(
                slot_id=s.id,
                day=DAYS[s.day],
                period=s.period + 1,
                start=start,
                end=end,
                subject=subject.name if subject else "",
                teacher=teacher.name if teacher else "",
                is_lab=bool(subject and subject.is_lab),
                color=subject.color if subject else None,
            )
        )
    return rows


def _cell(value: str) -> str:
    if any(ch in value for ch in ',"\n'):
        return '"' + value.replace('"', '""') + '"'
    return value


def csv_blocks(tt: Timetable, catalog: Catalog, config: TimetableConfig) -> str:
    # One block per day; lunch row sits after period lunch_break_period
    lines: List[str] = []
    lunch_start, lunch_end = lunch_range(config)
    rows = resolve_rows(tt, catalog, config)
    for day in DAYS:
        lines.append(HEADER)
        for r in rows:
            if r.day != day:
                continue
            lab = "yes" if r.is_lab else ""
            lines.append(
                ",".join(
                    [r.day, str(r.period), r.start, r.end, _cell(r.subject), _cell(r.teacher), lab]
                )
            )
            if r.period == config.lunch_break_period:
                lines.append(f"{day},,{lunch_start},{lunch_end},Lunch,,")
        lines.append("")  # blank line
    return "\n".join(lines)


def write_csv_blocks(text: str, outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "timetable.csv").open("w", encoding="utf-8") as f:
        f.write(text)
