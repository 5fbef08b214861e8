"""State-transition commands for checklists and their items.

Each command validates its input when constructed (or, for item commands,
when executed) and raises ValidationError / PreconditionError on contract
violations. execute() never touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from pyanpyan.errors import PreconditionError, ValidationError
from pyanpyan.models import (
    Checklist,
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistSchedule,
    Specific,
    StatePersistenceDuration,
)


# ── Validation ────────────────────────────────────────────────


def validate_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Checklist name cannot be blank")


def validate_schedule(schedule: ChecklistSchedule) -> None:
    time_range = schedule.time_range
    if isinstance(time_range, Specific) and not time_range.start_time < time_range.end_time:
        raise ValidationError("Start time must be before end time")


def validate_unique_item_ids(items: Sequence[ChecklistItem]) -> None:
    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise ValidationError("Checklist items must have unique IDs")


# ── Checklist commands ────────────────────────────────────────


@dataclass(frozen=True)
class CreateChecklist:
    id: ChecklistId
    name: str
    schedule: ChecklistSchedule
    items: Sequence[ChecklistItem]
    color: ChecklistColor = ChecklistColor.SOFT_BLUE
    state_persistence: StatePersistenceDuration = StatePersistenceDuration.FIFTEEN_MINUTES

    def __post_init__(self) -> None:
        validate_name(self.name)
        validate_schedule(self.schedule)
        validate_unique_item_ids(self.items)

    def execute(self) -> Checklist:
        return Checklist(
            id=self.id,
            name=self.name,
            schedule=self.schedule,
            items=tuple(self.items),
            color=self.color,
            state_persistence=self.state_persistence,
            last_accessed_at=None,
        )


@dataclass(frozen=True)
class UpdateChecklist:
    """Overwrite only the supplied fields; None keeps the current value."""

    checklist: Checklist
    name: str | None = None
    schedule: ChecklistSchedule | None = None
    color: ChecklistColor | None = None
    state_persistence: StatePersistenceDuration | None = None

    def __post_init__(self) -> None:
        if self.name is not None:
            validate_name(self.name)
        if self.schedule is not None:
            validate_schedule(self.schedule)

    def execute(self) -> Checklist:
        current = self.checklist
        return replace(
            current,
            name=self.name if self.name is not None else current.name,
            schedule=self.schedule if self.schedule is not None else current.schedule,
            color=self.color if self.color is not None else current.color,
            state_persistence=(
                self.state_persistence if self.state_persistence is not None else current.state_persistence
            ),
        )


@dataclass(frozen=True)
class ResetDailyState:
    def execute(self, checklist: Checklist) -> Checklist:
        return checklist.reset_all_items()


# ── Item commands ─────────────────────────────────────────────


def _check_target(expected: ChecklistItemId, item: ChecklistItem) -> None:
    if item.id != expected:
        raise PreconditionError(f"Item ID mismatch: expected {expected}, got {item.id}")


@dataclass(frozen=True)
class MarkItemDone:
    item_id: ChecklistItemId

    def execute(self, item: ChecklistItem) -> ChecklistItem:
        _check_target(self.item_id, item)
        return item.mark_done()


@dataclass(frozen=True)
class IgnoreItemToday:
    item_id: ChecklistItemId

    def execute(self, item: ChecklistItem) -> ChecklistItem:
        _check_target(self.item_id, item)
        return item.ignore_today()
