"""JSON-file backed patient repository.

Each mutating call reads the whole collection, changes it in memory and
writes it back with an atomic file replace. There is no locking: two writers
that overlap can lose one another's update (last writer wins).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union
from uuid import uuid4

from pydantic import ValidationError as SchemaError

from api.models.schemas import Patient, PatientCreateRequest, PatientUpdateRequest
from core.errors import NotFoundError, PersistenceError, ValidationError
from core.settings import get_settings
from pregnancy.calculator import parse_lmp
from pregnancy.milestones import DEFAULT_MILESTONES, Milestone, get_milestones
from pregnancy.schedule import build_reminder_schedule

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "phone", "lmp", "health_worker", "facility")
UPDATABLE_FIELDS = ("name", "phone", "lmp", "health_worker", "facility")

PatientInput = Union[PatientCreateRequest, Mapping[str, Any]]


class PatientStore:
    """Patient records kept as a single JSON array on disk."""

    def __init__(self, path: Path, milestones: Sequence[Milestone] = DEFAULT_MILESTONES) -> None:
        self.path = Path(path)
        self.milestones = milestones

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------
    def create(self, payload: PatientInput) -> Patient:
        request = _as_create_request(payload)
        values = {name: (getattr(request, name) or "").strip() for name in REQUIRED_FIELDS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ValidationError("All fields are required", fields=missing)
        lmp = parse_lmp(values["lmp"])

        patient = Patient(
            id=uuid4().hex,
            name=values["name"],
            phone=values["phone"],
            lmp=lmp,
            health_worker=values["health_worker"],
            facility=values["facility"],
            registered_date=_now(),
            reminders=build_reminder_schedule(lmp, self.milestones),
        )
        patients = self._read()
        patients.append(patient)
        self._write(patients)
        logger.info("New patient registered: %s (%s)", patient.name, patient.id)
        logger.debug(
            "Reminders scheduled for %s: %s",
            patient.id,
            [(r.week, r.scheduled_date.date().isoformat()) for r in patient.reminders],
        )
        return patient

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------
    def list(self) -> List[Patient]:
        return self._read()

    def get(self, patient_id: str) -> Patient:
        for patient in self._read():
            if patient.id == patient_id:
                return patient
        raise NotFoundError(patient_id)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------
    def update(self, patient_id: str, partial: Union[PatientUpdateRequest, Mapping[str, Any]]) -> Patient:
        """Merge the provided fields into a record.

        ``id`` and the reminder schedule are never overwritten; a new ``lmp``
        is validated but does not regenerate the schedule. Blank values are
        ignored, so a required field can never be emptied.
        """

        if not isinstance(partial, PatientUpdateRequest):
            partial = PatientUpdateRequest.model_validate(dict(partial))
        changes: Dict[str, Any] = {}
        for name, value in partial.model_dump(exclude_unset=True).items():
            if name not in UPDATABLE_FIELDS or value is None:
                continue
            value = value.strip()
            if value:
                changes[name] = value
        if "lmp" in changes:
            changes["lmp"] = parse_lmp(changes["lmp"])

        patients = self._read()
        index = _index_of(patients, patient_id)
        updated = patients[index].model_copy(update={**changes, "updated_date": _now()})
        patients[index] = updated
        self._write(patients)
        logger.info("Patient %s updated: %s", patient_id, sorted(changes))
        return updated

    def upsert(self, patient: Patient) -> Patient:
        """Replace the stored record with the same id, or append it."""

        patients = self._read()
        for index, existing in enumerate(patients):
            if existing.id == patient.id:
                patients[index] = patient
                break
        else:
            patients.append(patient)
        self._write(patients)
        return patient

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def delete(self, patient_id: str) -> None:
        patients = self._read()
        remaining = [patient for patient in patients if patient.id != patient_id]
        if len(remaining) == len(patients):
            raise NotFoundError(patient_id)
        self._write(remaining)
        logger.info("Patient %s deleted", patient_id)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------
    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            logger.exception("Cannot initialise patient data file %s", self.path)
            raise PersistenceError(f"Cannot initialise {self.path}: {exc}") from exc

    def _read(self) -> List[Patient]:
        self._ensure_file()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return [Patient.model_validate(record) for record in raw]
        except (OSError, ValueError, TypeError, SchemaError) as exc:
            logger.exception("Error reading patients data from %s", self.path)
            raise PersistenceError(f"Failed to read patient data: {exc}") from exc

    def _write(self, patients: List[Patient]) -> None:
        payload = [patient.model_dump(mode="json", by_alias=True) for patient in patients]
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
            ) as handle:
                tmp_name = handle.name
                json.dump(payload, handle, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.exception("Error writing patients data to %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Failed to save patient data: {exc}") from exc


def get_patient_store() -> PatientStore:
    """Build a store from the current settings (FastAPI dependency)."""

    settings = get_settings()
    return PatientStore(settings.data_path, get_milestones(settings.milestones_file))


def _as_create_request(payload: PatientInput) -> PatientCreateRequest:
    if isinstance(payload, PatientCreateRequest):
        return payload
    try:
        return PatientCreateRequest.model_validate(dict(payload))
    except SchemaError as exc:
        raise ValidationError(f"Invalid registration payload: {exc}") from exc


def _index_of(patients: List[Patient], patient_id: str) -> int:
    for index, patient in enumerate(patients):
        if patient.id == patient_id:
            return index
    raise NotFoundError(patient_id)


def _now() -> datetime:
    return datetime.now(timezone.utc)
