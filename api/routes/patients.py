"""HTTP routes for registering and maintaining patient records.

Domain errors from the store are translated to ``HTTPException`` here; the
application-level handlers in ``api.main`` render them as ``{"error": ...}``.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.models.schemas import (
    MessageResponse,
    Patient,
    PatientCreateRequest,
    PatientResponse,
    PatientSummary,
    PatientUpdateRequest,
    PregnancyDetails,
)
from api.services.patient_store import PatientStore, get_patient_store
from api.services.views import filter_patients, summarize
from core.errors import NotFoundError, PersistenceError, ValidationError
from pregnancy.calculator import compute_pregnancy_details

router = APIRouter(prefix="/api", tags=["patients"])


@router.get("/patients", response_model=List[Patient])
def list_patients(
    search: Optional[str] = None, store: PatientStore = Depends(get_patient_store)
) -> List[Patient]:
    """Return every registered patient, optionally filtered by name, phone or status."""

    return filter_patients(_load(store), search)


@router.post("/patients", response_model=PatientResponse, status_code=201)
def register_patient(
    request: PatientCreateRequest, store: PatientStore = Depends(get_patient_store)
) -> PatientResponse:
    """Register a patient and schedule her prenatal reminders."""

    try:
        patient = store.create(request)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to save patient data") from exc
    return PatientResponse(message="Patient registered successfully", patient=patient)


@router.get("/patients/summary", response_model=List[PatientSummary])
def patient_summaries(
    search: Optional[str] = None, store: PatientStore = Depends(get_patient_store)
) -> List[PatientSummary]:
    """Rows for the dashboard table: next pending reminder and status."""

    return [summarize(patient) for patient in filter_patients(_load(store), search)]


@router.get("/patients/{patient_id}", response_model=Patient)
def get_patient(patient_id: str, store: PatientStore = Depends(get_patient_store)) -> Patient:
    try:
        return store.get(patient_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Patient not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to read patient data") from exc


@router.put("/patients/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: str,
    request: PatientUpdateRequest,
    store: PatientStore = Depends(get_patient_store),
) -> PatientResponse:
    try:
        patient = store.update(patient_id, request)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Patient not found") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to update patient") from exc
    return PatientResponse(message="Patient updated successfully", patient=patient)


@router.delete("/patients/{patient_id}", response_model=MessageResponse)
def delete_patient(patient_id: str, store: PatientStore = Depends(get_patient_store)) -> MessageResponse:
    try:
        store.delete(patient_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Patient not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to delete patient") from exc
    return MessageResponse(message="Patient deleted successfully")


@router.get("/patients/{patient_id}/pregnancy", response_model=PregnancyDetails)
def patient_pregnancy(
    patient_id: str,
    as_of: Optional[date] = Query(None, alias="asOf"),
    store: PatientStore = Depends(get_patient_store),
) -> PregnancyDetails:
    """Current gestational week, trimester and due date for a patient."""

    try:
        patient = store.get(patient_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Patient not found") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to read patient data") from exc
    return compute_pregnancy_details(patient.lmp, as_of)


@router.get("/pregnancy", response_model=PregnancyDetails)
def pregnancy_preview(
    lmp: str, as_of: Optional[date] = Query(None, alias="asOf")
) -> PregnancyDetails:
    """Dating preview shown on the registration form when the LMP changes."""

    try:
        return compute_pregnancy_details(lmp, as_of)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _load(store: PatientStore) -> List[Patient]:
    try:
        return store.list()
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to read patient data") from exc
