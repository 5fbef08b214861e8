"""Active/inactive classification of checklists against local time."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable

from pyanpyan.models import Checklist, DayOfWeek


class ActivityState(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def get_activity_state(checklist: Checklist, current: datetime) -> ActivityState:
    """Classify *checklist* at the local date-time *current*.

    The day filter applies first (an empty day set means every day); the
    time window is then checked inclusively at both ends.
    """
    schedule = checklist.schedule
    if schedule.days_of_week and DayOfWeek.of(current) not in schedule.days_of_week:
        return ActivityState.INACTIVE

    if schedule.time_range.contains(current.time()):
        return ActivityState.ACTIVE
    return ActivityState.INACTIVE


def is_active(checklist: Checklist, current: datetime) -> bool:
    return get_activity_state(checklist, current) is ActivityState.ACTIVE


def partition_by_activity(
    checklists: Iterable[Checklist], current: datetime
) -> tuple[list[Checklist], list[Checklist]]:
    """Split into (active, inactive), each sorted by name."""
    active: list[Checklist] = []
    inactive: list[Checklist] = []
    for checklist in checklists:
        (active if is_active(checklist, current) else inactive).append(checklist)
    active.sort(key=lambda c: c.name)
    inactive.sort(key=lambda c: c.name)
    return active, inactive
