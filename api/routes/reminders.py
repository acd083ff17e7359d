"""HTTP routes for sending reminders."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from api.models.schemas import (
    DispatchStatus,
    DueReminderRequest,
    DueReminderResponse,
    SendReminderRequest,
    SendReminderResponse,
)
from api.services.dispatcher import ReminderDispatcher, get_dispatcher
from core.errors import NotFoundError, PersistenceError
from scheduler.service import DueReminderSweep, get_sweep

router = APIRouter(prefix="/api", tags=["reminders"])


@router.post("/send-reminder", response_model=SendReminderResponse)
def send_reminder(
    request: SendReminderRequest, dispatcher: ReminderDispatcher = Depends(get_dispatcher)
) -> SendReminderResponse:
    """Send an ad-hoc reminder (logged only; no SMS gateway is wired in)."""

    try:
        result = dispatcher.dispatch(request.patient_id, request.message, request.reminder_type)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Patient not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to record reminder") from exc
    label = "Reminder sent successfully" if result.status == DispatchStatus.SENT else "Reminder delivery failed"
    return SendReminderResponse(message=label, status=result.status, week=result.week)


@router.post("/reminders/dispatch-due", response_model=DueReminderResponse)
def dispatch_due(
    request: Optional[DueReminderRequest] = Body(None),
    sweep: DueReminderSweep = Depends(get_sweep),
) -> DueReminderResponse:
    """Send every scheduled reminder whose date is on or before ``asOf``."""

    as_of = (request.as_of if request else None) or date.today()
    try:
        results = sweep.run(as_of)
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to dispatch due reminders") from exc
    return DueReminderResponse(as_of=as_of, dispatched=results)
