"""Result models produced by the pregnancy calculator and scheduler."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Trimester(str, Enum):
    """Clinical thirds of a pregnancy, bucketed by gestational week."""

    FIRST = "First"
    SECOND = "Second"
    THIRD = "Third"


class PregnancyDetails(CamelModel):
    due_date: date
    current_week: int
    trimester: Trimester
    days_since_lmp: int = Field(alias="daysSinceLMP")


class ReminderEvent(CamelModel):
    week: int
    scheduled_date: datetime = Field(alias="date")
    message: str
    sent: bool = False


__all__ = ["CamelModel", "Trimester", "PregnancyDetails", "ReminderEvent"]
