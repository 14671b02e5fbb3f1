from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..errors import DataFileError
from ..models.config import TimetableConfig, validate_config


@dataclass
class LoadedData:
    config: TimetableConfig
    catalog: Dict[str, Any]
    schedule: List[Dict[str, Any]]


def load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DataFileError(f"{path}: invalid JSON ({e})") from e


def load_config(root: Path) -> TimetableConfig:
    """Read configs/timetable.toml if present, else defaults.

    Keys may sit at top level or under [timetable]; camelCase names are accepted.
    """
    cfg = root / "configs" / "timetable.toml"
    if not cfg.exists():
        return TimetableConfig()
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise DataFileError(f"{cfg}: invalid TOML ({e})") from e
    section = data.get("timetable") if isinstance(data.get("timetable"), dict) else data
    return validate_config(section)


def load_project(root: Path) -> LoadedData:
    data_dir = root / "data"
    catalog_path = data_dir / "catalog.json"
    if not catalog_path.exists():
        raise DataFileError(f"missing catalog file: {catalog_path}")
    catalog = load_json(catalog_path)
    if not isinstance(catalog, dict):
        raise DataFileError(f"{catalog_path}: expected an object with teachers and subjects")
    schedule_path = data_dir / "schedule.json"
    schedule: List[Dict[str, Any]] = []
    if schedule_path.exists():
        raw = load_json(schedule_path)
        # Either a bare slot array or {"slots": [...]}
        if isinstance(raw, dict):
            raw = raw.get("slots", [])
        if not isinstance(raw, list):
            raise DataFileError(f"{schedule_path}: expected a list of slots")
        schedule = raw
    return LoadedData(config=load_config(root), catalog=catalog, schedule=schedule)
