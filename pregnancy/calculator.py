"""Gestational dating from the last menstrual period."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

from core.errors import InvalidDateError
from pregnancy.milestones import (
    FIRST_TRIMESTER_LAST_WEEK,
    GESTATION_DAYS,
    SECOND_TRIMESTER_LAST_WEEK,
)
from pregnancy.models import PregnancyDetails, Trimester

DateLike = Union[date, datetime, str]


def parse_lmp(value: DateLike) -> date:
    """Coerce an LMP value into a calendar date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and full
    ISO-8601 timestamps (only the date part is kept).
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise InvalidDateError(value) from exc


def trimester_for_week(week: int) -> Trimester:
    if week <= FIRST_TRIMESTER_LAST_WEEK:
        return Trimester.FIRST
    if week <= SECOND_TRIMESTER_LAST_WEEK:
        return Trimester.SECOND
    return Trimester.THIRD


def compute_pregnancy_details(lmp: DateLike, as_of: Optional[date] = None) -> PregnancyDetails:
    """Return due date, gestational week and trimester for ``lmp``.

    Week and day counts are not clamped: an LMP in the future yields negative
    values and a stale record can report weeks beyond 40.
    """

    lmp_date = parse_lmp(lmp)
    if as_of is None:
        reference = date.today()
    elif isinstance(as_of, datetime):
        reference = as_of.date()
    else:
        reference = as_of
    days_since_lmp = (reference - lmp_date).days
    current_week = days_since_lmp // 7
    return PregnancyDetails(
        due_date=lmp_date + timedelta(days=GESTATION_DAYS),
        current_week=current_week,
        trimester=trimester_for_week(current_week),
        days_since_lmp=days_since_lmp,
    )


__all__ = ["parse_lmp", "trimester_for_week", "compute_pregnancy_details"]
