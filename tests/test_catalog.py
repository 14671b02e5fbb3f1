from __future__ import annotations

import pytest

from timegrid.data.catalog import Catalog
from timegrid.errors import NotFoundError, ValidationError
from timegrid.models.subject import SUBJECT_COLORS
from timegrid.session import TimetableSession


def test_subject_requires_known_teacher() -> None:
    catalog = Catalog()
    with pytest.raises(ValidationError):
        catalog.add_subject("Biology", "nobody", 3)
    assert catalog.subjects == {}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "hours_per_week": 3},
        {"name": "Art", "hours_per_week": 0},
        {"name": "Art", "hours_per_week": 2, "is_lab": True, "lab_duration": 4},
    ],
)
def test_subject_field_checks(kwargs: dict) -> None:
    catalog = Catalog()
    t = catalog.add_teacher("Cleo")
    with pytest.raises(ValidationError):
        catalog.add_subject(teacher_id=t.id, **kwargs)
    assert catalog.subjects == {}


def test_non_lab_keeps_default_duration() -> None:
    catalog = Catalog()
    t = catalog.add_teacher("Cleo")
    s = catalog.add_subject("History", t.id, 2, is_lab=False, lab_duration=3)
    assert s.lab_duration == 2


def test_colors_round_robin_and_stay_put() -> None:
    catalog = Catalog()
    t = catalog.add_teacher("Cleo")
    made = [catalog.add_subject(f"S{i}", t.id, 1) for i in range(len(SUBJECT_COLORS) + 1)]
    assert [s.color for s in made[:-1]] == SUBJECT_COLORS
    assert made[-1].color == SUBJECT_COLORS[0]
    second = made[1]
    catalog.remove_subject(made[0].id)
    assert catalog.subject(second.id).color == SUBJECT_COLORS[1]


def test_ids_are_unique() -> None:
    catalog = Catalog()
    teachers = [catalog.add_teacher(f"T{i}") for i in range(50)]
    assert len({t.id for t in teachers}) == 50
    assert all(len(t.id) == 7 for t in teachers)


def test_remove_teacher_returns_removed_subjects() -> None:
    catalog = Catalog()
    a = catalog.add_teacher("A")
    b = catalog.add_teacher("B")
    s1 = catalog.add_subject("One", a.id, 1)
    s2 = catalog.add_subject("Two", a.id, 1)
    s3 = catalog.add_subject("Three", b.id, 1)
    assert sorted(catalog.remove_teacher(a.id)) == sorted([s1.id, s2.id])
    assert list(catalog.subjects) == [s3.id]
    assert catalog.remove_teacher("missing") == []


def test_lookup_unknown_ids() -> None:
    catalog = Catalog()
    with pytest.raises(NotFoundError):
        catalog.teacher("x")
    with pytest.raises(NotFoundError):
        catalog.subject("x")
    assert catalog.teacher_of("x") is None


def test_load_from_data_round_trips_colors() -> None:
    data = {
        "teachers": [{"id": "t1", "name": "Ada"}],
        "subjects": [
            {"id": "s1", "name": "Algebra", "teacherId": "t1", "hoursPerWeek": 3, "color": "red"},
            {"id": "s2", "name": "Lab", "teacher_id": "t1", "hours_per_week": 2, "is_lab": True, "lab_duration": 3},
        ],
    }
    catalog = Catalog(data)
    assert catalog.subject("s1").color == "red"
    assert catalog.subject("s2").lab_duration == 3
    assert catalog.teacher_of("s2").name == "Ada"


def test_delete_teacher_cascades_to_slots(session: TimetableSession, ids: dict) -> None:
    session.drop_subject("0-0", ids["Algebra"])
    session.drop_subject("1-2", ids["Geometry"])
    session.drop_subject("2-2", ids["Chemistry Lab"])
    session.delete_teacher(ids["Ada"])
    assert set(session.catalog.subjects) == {ids["Chemistry Lab"]}
    assert len(session.slots) == 40
    assert [s.subject_id for s in session.timetable.occupied()] == [ids["Chemistry Lab"]]


def test_delete_subject_clears_slots_and_cursor(session: TimetableSession, ids: dict) -> None:
    session.select_subject(ids["Algebra"])
    session.click_slot("0-0")
    session.click_slot("3-5")
    session.delete_subject(ids["Algebra"])
    assert list(session.timetable.occupied()) == []
    assert session.selected_subject_id is None
    session.delete_subject("missing")
    assert len(session.slots) == 40


def test_catalog_dict_reloads_unchanged() -> None:
    catalog = Catalog()
    t = catalog.add_teacher("Cleo")
    catalog.add_subject("History", t.id, 2)
    lab = catalog.add_subject("Robotics", t.id, 3, is_lab=True, lab_duration=3)
    again = Catalog(catalog.to_dict())
    assert again.teachers == catalog.teachers
    assert again.subjects == catalog.subjects
    assert again.subject(lab.id).color == SUBJECT_COLORS[1]
