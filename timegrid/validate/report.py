from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Dict, List

from ..data.catalog import Catalog
from ..models.conflict import Conflict
from ..models.timetable import Timetable
from ..scheduler.placement import hours_placed, remaining_hours


def build_report(tt: Timetable, catalog: Catalog, conflicts: List[Conflict]) -> Dict[str, object]:
    placed = hours_placed(tt.all())
    quotas = {sid: s.hours_per_week for sid, s in catalog.subjects.items()}
    remaining = remaining_hours(quotas, placed)
    report: Dict[str, object] = {}
    report["conflict_count"] = len(conflicts)
    report["conflicts_by_kind"] = dict(Counter(c.kind for c in conflicts))
    report["conflicts"] = [c.to_dict() for c in conflicts]
    report["hours_placed"] = {sid: placed.get(sid, 0) for sid in sorted(catalog.subjects)}
    report["unmet_weekly_hours"] = {sid: r for sid, r in sorted(remaining.items()) if r > 0}
    report["over_quota"] = {sid: -r for sid, r in sorted(remaining.items()) if r < 0}
    report["empty_slots"] = sum(1 for s in tt.all() if s.subject_id is None)
    return report


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / "validation.json").open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"conflict_count: {report.get('conflict_count')}")
    by_kind = report.get("conflicts_by_kind", {})
    lines.append("conflicts_by_kind:")
    if isinstance(by_kind, dict):
        for k, v in by_kind.items():
            lines.append(f"  - {k}: {v}")
    conflicts = report.get("conflicts", [])
    if isinstance(conflicts, list):
        for c in conflicts:
            lines.append(f"  ! {c['message']} [{', '.join(c['slots'])}]")
    unmet = report.get("unmet_weekly_hours", {})
    lines.append(f"unmet_weekly_hours: {len(unmet)} entries")
    over = report.get("over_quota", {})
    lines.append(f"over_quota: {len(over)} entries")
    lines.append(f"empty_slots: {report.get('empty_slots')}")
    return "\n".join(lines)
