from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from core.errors import ConfigurationError, InvalidDateError
from pregnancy.milestones import DEFAULT_MILESTONES, Milestone, get_milestones, load_milestones
from pregnancy.schedule import build_reminder_schedule


def test_default_schedule_has_seven_ascending_unsent_events() -> None:
    schedule = build_reminder_schedule(date(2024, 1, 1))
    assert [event.week for event in schedule] == [12, 16, 20, 24, 28, 32, 36]
    assert all(event.sent is False for event in schedule)
    dates = [event.scheduled_date for event in schedule]
    assert all(earlier < later for earlier, later in zip(dates, dates[1:]))


def test_event_dates_are_week_offsets_from_lmp() -> None:
    lmp = date(2024, 2, 29)
    for event in build_reminder_schedule(lmp):
        assert event.scheduled_date.date() == lmp + timedelta(days=event.week * 7)


def test_first_event_for_new_year_lmp() -> None:
    first = build_reminder_schedule("2024-01-01")[0]
    assert first.scheduled_date.date() == date(2024, 3, 25)
    assert "first prenatal visit" in first.message


def test_messages_follow_milestone_table() -> None:
    schedule = build_reminder_schedule(date(2024, 1, 1))
    assert [event.message for event in schedule] == [m.message for m in DEFAULT_MILESTONES]
    assert "tetanus" in schedule[1].message
    assert "Ultrasound" in schedule[2].message
    assert "Final prenatal visit" in schedule[-1].message


def test_schedule_serialises_with_original_keys() -> None:
    event = build_reminder_schedule(date(2024, 1, 1))[0]
    payload = event.model_dump(mode="json", by_alias=True)
    assert set(payload) == {"week", "date", "message", "sent"}
    assert payload["date"].startswith("2024-03-25T00:00:00")


def test_custom_table_is_sorted() -> None:
    table = [Milestone(30, "later"), Milestone(10, "earlier")]
    assert [event.week for event in build_reminder_schedule(date(2024, 1, 1), table)] == [10, 30]


def test_invalid_lmp_raises() -> None:
    with pytest.raises(InvalidDateError):
        build_reminder_schedule("31/12/2024")


def test_load_milestones_from_file(tmp_path) -> None:
    path = tmp_path / "milestones.json"
    path.write_text(json.dumps([{"week": 20, "message": "b"}, {"week": 8, "message": "a"}]))
    assert [m.week for m in load_milestones(path)] == [8, 20]
    assert load_milestones(None) == DEFAULT_MILESTONES


def test_load_milestones_rejects_malformed_file(tmp_path) -> None:
    path = tmp_path / "milestones.json"
    path.write_text(json.dumps([{"week": "soon"}]))
    with pytest.raises(ConfigurationError):
        load_milestones(path)


def test_missing_milestone_file_is_a_configuration_error(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_milestones(tmp_path / "absent.json")


def test_configured_table_is_read_once(tmp_path) -> None:
    path = tmp_path / "cached.json"
    path.write_text(json.dumps([{"week": 10, "message": "first"}]))
    first = get_milestones(path)
    path.write_text(json.dumps([{"week": 11, "message": "changed"}]))
    assert get_milestones(path) is first
    assert [m.week for m in first] == [10]
