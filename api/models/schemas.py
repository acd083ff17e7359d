"""Pydantic data models used by the FastAPI layer and the JSON store.

Records are persisted with the camelCase keys the browser front end reads
(``healthWorker``, ``registeredDate``, ``sentReminders``); Python code uses
the snake_case attribute names.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from pregnancy.models import CamelModel, PregnancyDetails, ReminderEvent, Trimester


class DispatchStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class SentReminder(CamelModel):
    type: str
    message: str
    sent_date: datetime
    week: Optional[int] = None
    status: DispatchStatus = DispatchStatus.SENT


class Patient(CamelModel):
    id: str
    name: str
    phone: str
    lmp: date
    health_worker: str
    facility: str
    registered_date: datetime
    updated_date: Optional[datetime] = None
    reminders: List[ReminderEvent] = Field(default_factory=list)
    sent_reminders: List[SentReminder] = Field(default_factory=list)


class PatientCreateRequest(CamelModel):
    # Presence is checked by the store so a missing field answers 400, not 422.
    name: Optional[str] = None
    phone: Optional[str] = None
    lmp: Optional[str] = None
    health_worker: Optional[str] = None
    facility: Optional[str] = None


class PatientUpdateRequest(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    lmp: Optional[str] = None
    health_worker: Optional[str] = None
    facility: Optional[str] = None


class PatientResponse(CamelModel):
    message: str
    patient: Patient


class MessageResponse(CamelModel):
    message: str


class PatientSummary(CamelModel):
    """One row of the dashboard table."""

    id: str
    name: str
    phone: str
    next_reminder_date: Optional[datetime] = None
    status: str


class SendReminderRequest(CamelModel):
    patient_id: str
    message: Optional[str] = None
    reminder_type: Optional[str] = None


class DispatchResult(CamelModel):
    patient_id: str
    status: DispatchStatus
    week: Optional[int] = None


class SendReminderResponse(CamelModel):
    message: str
    status: DispatchStatus
    week: Optional[int] = None


class DueReminderRequest(CamelModel):
    as_of: Optional[date] = None


class DueReminderResponse(CamelModel):
    as_of: date
    dispatched: List[DispatchResult] = Field(default_factory=list)


class HealthResponse(CamelModel):
    status: str
    message: str
    timestamp: datetime


__all__ = [
    "Trimester",
    "DispatchStatus",
    "PregnancyDetails",
    "ReminderEvent",
    "SentReminder",
    "Patient",
    "PatientCreateRequest",
    "PatientUpdateRequest",
    "PatientResponse",
    "MessageResponse",
    "PatientSummary",
    "SendReminderRequest",
    "DispatchResult",
    "SendReminderResponse",
    "DueReminderRequest",
    "DueReminderResponse",
    "HealthResponse",
]
