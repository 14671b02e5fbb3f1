from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from timegrid.session import TimetableSession


ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    shutil.copytree(ROOT / "data", tmp_path / "data")
    shutil.copytree(ROOT / "configs", tmp_path / "configs")
    return tmp_path


@pytest.fixture
def session() -> TimetableSession:
    # Two teachers; Ada teaches two subjects so they can clash with each other
    s = TimetableSession()
    ada = s.create_teacher("Ada")
    bob = s.create_teacher("Bob")
    s.create_subject("Algebra", ada.id, 3)
    s.create_subject("Geometry", ada.id, 2)
    s.create_subject("Chemistry Lab", bob.id, 2, is_lab=True, lab_duration=2)
    return s


@pytest.fixture
def ids(session: TimetableSession) -> dict[str, str]:
    ids = {s.name: sid for sid, s in session.catalog.subjects.items()}
    ids.update({t.name: tid for tid, t in session.catalog.teachers.items()})
    return ids
