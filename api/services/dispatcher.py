"""Reminder delivery and the per-patient delivery log.

Delivery is a placeholder: the default channel writes the SMS text to the log
and reports success. A real gateway only needs to implement
``DeliveryChannel.deliver``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol

from api.models.schemas import DispatchResult, DispatchStatus, Patient, SentReminder
from api.services.patient_store import PatientStore, get_patient_store
from core.settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Reminder: Please attend your appointment."
DEFAULT_REMINDER_TYPE = "appointment"


class DeliveryChannel(Protocol):
    def deliver(self, patient: Patient, message: str) -> bool:
        ...


class LoggingChannel:
    """Stand-in for an SMS gateway."""

    def deliver(self, patient: Patient, message: str) -> bool:
        logger.info("SMS Reminder for %s (%s): %s", patient.name, patient.phone, message)
        return True


class ReminderDispatcher:
    """Send a reminder to a patient and record it in ``sentReminders``.

    A successful send for an explicit ``week`` marks that scheduled reminder
    as sent. For ad-hoc sends, ``reconcile`` decides whether the earliest
    unsent reminder is marked; without it the delivery log and the ``sent``
    flags stay independent of each other.
    """

    def __init__(
        self,
        store: PatientStore,
        channel: Optional[DeliveryChannel] = None,
        reconcile: bool = True,
    ) -> None:
        self.store = store
        self.channel = channel or LoggingChannel()
        self.reconcile = reconcile

    def dispatch(
        self,
        patient_id: str,
        message: Optional[str] = None,
        reminder_type: Optional[str] = None,
        week: Optional[int] = None,
    ) -> DispatchResult:
        patient = self.store.get(patient_id)
        text = (message or "").strip() or DEFAULT_MESSAGE
        kind = (reminder_type or "").strip() or DEFAULT_REMINDER_TYPE

        delivered = self.channel.deliver(patient, text)
        status = DispatchStatus.SENT if delivered else DispatchStatus.FAILED
        matched_week = None
        if delivered and (week is not None or self.reconcile):
            matched_week = _mark_sent(patient, week)
        elif week is not None:
            matched_week = week

        patient.sent_reminders.append(
            SentReminder(
                type=kind,
                message=text,
                sent_date=datetime.now(timezone.utc),
                week=matched_week,
                status=status,
            )
        )
        self.store.upsert(patient)
        if delivered:
            logger.info("Reminder %s for patient %s (week %s)", status.value, patient_id, matched_week)
        else:
            logger.warning("Reminder delivery failed for patient %s", patient_id)
        return DispatchResult(patient_id=patient_id, status=status, week=matched_week)


def _mark_sent(patient: Patient, week: Optional[int]) -> Optional[int]:
    for reminder in patient.reminders:
        if reminder.sent:
            continue
        if week is None or reminder.week == week:
            reminder.sent = True
            return reminder.week
    return None


def get_dispatcher() -> ReminderDispatcher:
    """Build a dispatcher from the current settings (FastAPI dependency)."""

    return ReminderDispatcher(get_patient_store(), reconcile=get_settings().reconcile_dispatch)
