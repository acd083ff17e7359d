"""Dashboard helpers: next reminder, status label and text filtering."""

from __future__ import annotations

from typing import Iterable, List, Optional

from api.models.schemas import Patient, PatientSummary, ReminderEvent

STATUS_PENDING = "Pending"
STATUS_ALL_SENT = "All Sent"


def next_pending_reminder(patient: Patient) -> Optional[ReminderEvent]:
    return next((reminder for reminder in patient.reminders if not reminder.sent), None)


def reminder_status(patient: Patient) -> str:
    return STATUS_PENDING if next_pending_reminder(patient) else STATUS_ALL_SENT


def filter_patients(patients: Iterable[Patient], term: Optional[str]) -> List[Patient]:
    """Keep patients whose name, phone or status label contains ``term``."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(patients)
    return [
        patient
        for patient in patients
        if needle in patient.name.lower()
        or needle in patient.phone.lower()
        or needle in reminder_status(patient).lower()
    ]


def summarize(patient: Patient) -> PatientSummary:
    upcoming = next_pending_reminder(patient)
    return PatientSummary(
        id=patient.id,
        name=patient.name,
        phone=patient.phone,
        next_reminder_date=upcoming.scheduled_date if upcoming else None,
        status=reminder_status(patient),
    )
