"""Prenatal milestone table and trimester thresholds.

This is the only place these clinical constants are defined; the calculator,
the scheduler and the browser UI (through the API) all read them from here.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence

from core.errors import ConfigurationError

GESTATION_DAYS = 280
FIRST_TRIMESTER_LAST_WEEK = 12
SECOND_TRIMESTER_LAST_WEEK = 26


@dataclass(frozen=True)
class Milestone:
    week: int
    message: str


DEFAULT_MILESTONES: Sequence[Milestone] = (
    Milestone(12, "Time for your first prenatal visit! Please visit your health facility."),
    Milestone(16, "Second prenatal visit due. Don't forget your tetanus vaccination!"),
    Milestone(20, "Ultrasound scan recommended. Book your appointment today."),
    Milestone(24, "Third prenatal visit is due. Monitor your baby's growth."),
    Milestone(28, "Important prenatal checkup needed. Stay healthy!"),
    Milestone(32, "Getting closer! Time for another prenatal visit."),
    Milestone(36, "Final prenatal visit before delivery. Prepare for childbirth."),
)


def load_milestones(path: Optional[Path]) -> Sequence[Milestone]:
    """Read a milestone table from a JSON file of ``{week, message}`` objects.

    Returns ``DEFAULT_MILESTONES`` when ``path`` is ``None``.
    """

    if path is None:
        return DEFAULT_MILESTONES
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read milestone table {path}: {exc}") from exc
    if not isinstance(raw, list) or not raw:
        raise ConfigurationError(f"Milestone table {path} must be a non-empty list")
    milestones: List[Milestone] = []
    for entry in raw:
        try:
            milestones.append(Milestone(week=int(entry["week"]), message=str(entry["message"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed milestone entry {entry!r}") from exc
    return tuple(sorted(milestones, key=lambda milestone: milestone.week))


@lru_cache(maxsize=8)
def get_milestones(path: Optional[Path]) -> Sequence[Milestone]:
    """Load the configured table once per path; failures are not cached."""

    return load_milestones(path)


__all__ = [
    "GESTATION_DAYS",
    "FIRST_TRIMESTER_LAST_WEEK",
    "SECOND_TRIMESTER_LAST_WEEK",
    "Milestone",
    "DEFAULT_MILESTONES",
    "load_milestones",
    "get_milestones",
]
