from __future__ import annotations

import json

from timegrid.models import TimetableConfig
from timegrid.scheduler.repair import extract_slot_array, sanitize_slots
from timegrid.session import TimetableSession


def test_partial_generated_schedule_is_completed(session: TimetableSession, ids: dict) -> None:
    raw = [
        {"id": "0-0", "subjectId": ids["Algebra"], "day": 0, "period": 0, "isLunchBreak": False},
        {"id": "2-3", "subjectId": "not-a-subject", "day": 2, "period": 3, "isLunchBreak": False},
        {"id": "4-7", "subjectId": ids["Chemistry Lab"], "day": 4, "period": 7, "isLunchBreak": False},
    ]
    slots = session.accept_generated_schedule(raw)
    assert len(slots) == 40
    assert len({s.id for s in slots}) == 40
    by_id = {s.id: s.subject_id for s in slots}
    assert by_id["0-0"] == ids["Algebra"]
    assert by_id["2-3"] is None
    assert by_id["4-7"] == ids["Chemistry Lab"]
    assert sum(1 for v in by_id.values() if v is None) == 38
    reasons = [n.reason for n in session.last_repairs]
    assert sum(1 for r in reasons if r == "missing, filled empty") == 37
    assert any("not-a-subject" in r for r in reasons)


def test_sanitize_drops_bad_entries() -> None:
    cfg = TimetableConfig(periods_per_day=6, lunch_break_period=3)
    raw = [
        {"day": 0, "period": 0, "subjectId": "a"},
        {"day": 0, "period": 0, "subjectId": "b"},
        {"day": 5, "period": 0, "subjectId": "a"},
        {"day": 1, "period": 6, "subjectId": "a"},
        {"day": "x", "period": 1},
        {"id": "3-2", "subject_id": "b"},
        {"day": 2, "period": 2, "subjectId": ["a"]},
        {"day": 2, "period": 3, "subjectId": {"id": "a"}},
        "junk",
    ]
    slots, notes = sanitize_slots(raw, cfg, {"a", "b"})
    assert len(slots) == 30
    assert [(s.id, s.subject_id) for s in slots if s.subject_id] == [("0-0", "a"), ("3-2", "b")]
    reasons = {n.reason for n in notes}
    assert {"duplicate coordinate", "outside the grid", "unreadable coordinates", "entry is not an object"} <= reasons
    assert "unknown subject ['a'] cleared" in reasons
    assert "unknown subject {'id': 'a'} cleared" in reasons


def test_extract_array_from_chatty_reply() -> None:
    payload = [{"id": "0-0", "subjectId": None, "day": 0, "period": 0, "isLunchBreak": False}]
    text = "Here is your timetable:\n```json\n" + json.dumps(payload) + "\n```\nEnjoy!"
    assert extract_slot_array(text) == payload


def test_extract_array_failures_yield_empty_list() -> None:
    assert extract_slot_array("no schedule today") == []
    assert extract_slot_array("[not json]") == []
    assert extract_slot_array("") == []


def test_unparseable_reply_gives_empty_grid(session: TimetableSession, ids: dict) -> None:
    session.drop_subject("0-0", ids["Algebra"])
    slots = session.accept_generated_reply("Sorry, I cannot help with that.")
    assert len(slots) == 40
    assert all(s.subject_id is None for s in slots)


def test_generation_prompt_mentions_catalog(session: TimetableSession, ids: dict) -> None:
    prompt = session.generation_prompt()
    assert f"- Ada (ID: {ids['Ada']})" in prompt
    assert f"Chemistry Lab (ID: {ids['Chemistry Lab']}): 2 hours/week, Teacher: Bob, LAB (2 consecutive periods)" in prompt
    assert "Periods per day: 8 (indexed 0-7)" in prompt
    assert "Generate ALL 40 slots" in prompt


def test_non_integer_coordinates_are_unreadable(session: TimetableSession, ids: dict) -> None:
    reply = (
        '[{"day": 1e999, "period": 0, "subjectId": null},'
        ' {"day": 0, "period": Infinity, "subjectId": null},'
        ' {"day": 1.0, "period": 2, "subjectId": null},'
        ' {"day": true, "period": 2, "subjectId": null},'
        f' {{"day": 3, "period": 1, "subjectId": "{ids["Algebra"]}"}}]'
    )
    slots = session.accept_generated_reply(reply)
    assert len(slots) == 40
    assert [(s.id, s.subject_id) for s in slots if s.subject_id] == [("3-1", ids["Algebra"])]
    reasons = [n.reason for n in session.last_repairs]
    assert reasons.count("unreadable coordinates") == 4
