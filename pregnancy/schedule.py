"""Prenatal reminder schedule derived from the LMP."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import List, Sequence

from pregnancy.calculator import DateLike, parse_lmp
from pregnancy.milestones import DEFAULT_MILESTONES, Milestone
from pregnancy.models import ReminderEvent


def build_reminder_schedule(
    lmp: DateLike, milestones: Sequence[Milestone] = DEFAULT_MILESTONES
) -> List[ReminderEvent]:
    """Create one unsent reminder per milestone, ordered by week."""

    lmp_date = parse_lmp(lmp)
    start = datetime.combine(lmp_date, time.min, tzinfo=timezone.utc)
    return [
        ReminderEvent(
            week=milestone.week,
            scheduled_date=start + timedelta(weeks=milestone.week),
            message=milestone.message,
            sent=False,
        )
        for milestone in sorted(milestones, key=lambda item: item.week)
    ]


__all__ = ["build_reminder_schedule"]
