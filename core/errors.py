"""Exception taxonomy shared by the registry services and HTTP layer."""

from __future__ import annotations

from typing import Iterable, List


class RegistryError(Exception):
    """Base class for every error the registry surfaces to callers."""


class ValidationError(RegistryError):
    """A registration or update payload is missing required fields."""

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields: List[str] = list(fields)


class InvalidDateError(ValidationError):
    """An LMP value could not be parsed as a calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid LMP date: {value!r}", fields=["lmp"])
        self.value = value


class NotFoundError(RegistryError):
    """No patient exists with the requested identifier."""

    def __init__(self, patient_id: str) -> None:
        super().__init__(f"Patient not found: {patient_id}")
        self.patient_id = patient_id


class PersistenceError(RegistryError):
    """Reading or writing the patient data file failed."""


class ConfigurationError(RegistryError):
    """A configured resource, such as the milestone table, is unusable."""


__all__ = [
    "RegistryError",
    "ValidationError",
    "InvalidDateError",
    "NotFoundError",
    "PersistenceError",
    "ConfigurationError",
]
