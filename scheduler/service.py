"""Sweep that sends every scheduled reminder whose date has arrived."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from api.models.schemas import DispatchResult
from api.services.dispatcher import ReminderDispatcher, get_dispatcher
from core.errors import NotFoundError

logger = logging.getLogger(__name__)

SCHEDULED_REMINDER_TYPE = "scheduled"


class DueReminderSweep:
    """Walk all patients and dispatch reminders that are due on ``as_of``."""

    def __init__(self, dispatcher: ReminderDispatcher) -> None:
        self.dispatcher = dispatcher

    def run(self, as_of: Optional[date] = None) -> List[DispatchResult]:
        reference = as_of or date.today()
        results: List[DispatchResult] = []
        for patient in self.dispatcher.store.list():
            for reminder in patient.reminders:
                if reminder.sent or reminder.scheduled_date.date() > reference:
                    continue
                try:
                    result = self.dispatcher.dispatch(
                        patient.id,
                        reminder.message,
                        SCHEDULED_REMINDER_TYPE,
                        week=reminder.week,
                    )
                except NotFoundError:
                    # Deleted after the patient list was read.
                    logger.warning("Patient %s disappeared during the sweep; skipping", patient.id)
                    break
                results.append(result)
        logger.info("Due reminder sweep for %s dispatched %d reminder(s)", reference, len(results))
        return results


def get_sweep() -> DueReminderSweep:
    return DueReminderSweep(get_dispatcher())
