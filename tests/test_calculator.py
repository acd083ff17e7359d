from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from api.models.schemas import Trimester
from core.errors import InvalidDateError
from pregnancy.calculator import compute_pregnancy_details, parse_lmp, trimester_for_week


def test_same_day_is_week_zero() -> None:
    lmp = date(2024, 5, 17)
    details = compute_pregnancy_details(lmp, lmp)
    assert details.days_since_lmp == 0
    assert details.current_week == 0
    assert details.trimester == Trimester.FIRST


@pytest.mark.parametrize(
    "lmp, expected",
    [
        (date(2024, 1, 1), date(2024, 10, 7)),
        (date(2024, 2, 29), date(2024, 12, 5)),
        (date(2023, 4, 30), date(2024, 2, 4)),
        (date(2023, 12, 31), date(2024, 10, 6)),
    ],
)
def test_due_date_is_280_days_after_lmp(lmp: date, expected: date) -> None:
    details = compute_pregnancy_details(lmp, lmp)
    assert details.due_date == expected
    assert details.due_date - lmp == timedelta(days=280)


@pytest.mark.parametrize(
    "week, trimester",
    [
        (0, Trimester.FIRST),
        (12, Trimester.FIRST),
        (13, Trimester.SECOND),
        (26, Trimester.SECOND),
        (27, Trimester.THIRD),
        (45, Trimester.THIRD),
        (-2, Trimester.FIRST),
    ],
)
def test_trimester_boundaries(week: int, trimester: Trimester) -> None:
    assert trimester_for_week(week) == trimester
    lmp = date(2024, 1, 1)
    details = compute_pregnancy_details(lmp, lmp + timedelta(weeks=week))
    assert details.current_week == week
    assert details.trimester == trimester


def test_week_rounds_down_within_a_week() -> None:
    lmp = date(2024, 1, 1)
    assert compute_pregnancy_details(lmp, lmp + timedelta(days=13)).current_week == 1


def test_future_lmp_gives_negative_values() -> None:
    details = compute_pregnancy_details(date(2024, 3, 10), date(2024, 3, 1))
    assert details.days_since_lmp == -9
    assert details.current_week == -2


def test_stale_record_is_not_clamped() -> None:
    details = compute_pregnancy_details(date(2022, 1, 1), date(2024, 1, 1))
    assert details.current_week > 40
    assert details.trimester == Trimester.THIRD


def test_repeated_calls_are_identical() -> None:
    first = compute_pregnancy_details("2024-01-01", date(2024, 6, 1))
    second = compute_pregnancy_details("2024-01-01", date(2024, 6, 1))
    assert first == second


def test_parse_lmp_accepts_strings_and_datetimes() -> None:
    assert parse_lmp("2024-02-29") == date(2024, 2, 29)
    assert parse_lmp("2024-02-29T00:00:00.000Z") == date(2024, 2, 29)
    assert parse_lmp(datetime(2024, 2, 29, 15, 30)) == date(2024, 2, 29)


@pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2023-02-29", "2024-13-01", None, 20240101])
def test_unparseable_lmp_raises(value) -> None:
    with pytest.raises(InvalidDateError):
        compute_pregnancy_details(value, date(2024, 1, 1))


def test_as_of_may_be_a_datetime() -> None:
    details = compute_pregnancy_details(date(2024, 1, 1), datetime(2024, 4, 1, 18, 45))
    assert details.days_since_lmp == 91
    assert details.current_week == 13


def test_result_models_live_with_the_calculator() -> None:
    from api.models import schemas
    from pregnancy import models

    assert schemas.PregnancyDetails is models.PregnancyDetails
    assert schemas.ReminderEvent is models.ReminderEvent
    assert schemas.Trimester is models.Trimester
