"""Pregnancy dating and prenatal reminder scheduling."""

from .calculator import compute_pregnancy_details, parse_lmp, trimester_for_week
from .milestones import DEFAULT_MILESTONES, GESTATION_DAYS, Milestone, get_milestones, load_milestones
from .models import PregnancyDetails, ReminderEvent, Trimester
from .schedule import build_reminder_schedule

__all__ = [
    "DEFAULT_MILESTONES",
    "GESTATION_DAYS",
    "Milestone",
    "PregnancyDetails",
    "ReminderEvent",
    "Trimester",
    "build_reminder_schedule",
    "compute_pregnancy_details",
    "get_milestones",
    "load_milestones",
    "parse_lmp",
    "trimester_for_week",
]
