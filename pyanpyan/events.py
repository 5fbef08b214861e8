"""Checklist lifecycle events emitted by the session and library flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Union

from pyanpyan.models import Checklist, ChecklistId, format_instant


class ChangeType(Enum):
    NAME = "name"
    SCHEDULE = "schedule"
    COLOR = "color"
    STATE_PERSISTENCE = "state_persistence"
    ITEMS_ADDED = "items_added"
    ITEMS_REMOVED = "items_removed"
    ITEMS_REORDERED = "items_reordered"


@dataclass(frozen=True)
class ChecklistCreated:
    checklist_id: ChecklistId
    timestamp: datetime
    name: str
    item_count: int

    kind = "created"


@dataclass(frozen=True)
class ChecklistUpdated:
    checklist_id: ChecklistId
    timestamp: datetime
    changes: frozenset[ChangeType] = field(default_factory=frozenset)

    kind = "updated"


@dataclass(frozen=True)
class ChecklistAccessed:
    checklist_id: ChecklistId
    timestamp: datetime
    was_reset: bool = False

    kind = "accessed"


@dataclass(frozen=True)
class ChecklistCompleted:
    """The last pending item of a checklist was settled."""

    checklist_id: ChecklistId
    timestamp: datetime

    kind = "completed"


@dataclass(frozen=True)
class ChecklistDeleted:
    checklist_id: ChecklistId
    timestamp: datetime

    kind = "deleted"


ChecklistEvent = Union[ChecklistCreated, ChecklistUpdated, ChecklistAccessed, ChecklistCompleted, ChecklistDeleted]

EventSink = Callable[[ChecklistEvent], None]


def detect_changes(before: Checklist, after: Checklist) -> frozenset[ChangeType]:
    """Which parts of a checklist differ between two versions."""
    changes = set()
    if before.name != after.name:
        changes.add(ChangeType.NAME)
    if before.schedule != after.schedule:
        changes.add(ChangeType.SCHEDULE)
    if before.color != after.color:
        changes.add(ChangeType.COLOR)
    if before.state_persistence != after.state_persistence:
        changes.add(ChangeType.STATE_PERSISTENCE)

    old_ids = [item.id for item in before.items]
    new_ids = [item.id for item in after.items]
    if set(new_ids) - set(old_ids):
        changes.add(ChangeType.ITEMS_ADDED)
    if set(old_ids) - set(new_ids):
        changes.add(ChangeType.ITEMS_REMOVED)
    kept_old = [i for i in old_ids if i in set(new_ids)]
    kept_new = [i for i in new_ids if i in set(old_ids)]
    if kept_old != kept_new:
        changes.add(ChangeType.ITEMS_REORDERED)
    return frozenset(changes)


def event_to_dict(event: ChecklistEvent) -> dict[str, Any]:
    d: dict[str, Any] = {
        "event": event.kind,
        "checklistId": event.checklist_id.value,
        "timestamp": format_instant(event.timestamp),
    }
    if isinstance(event, ChecklistCreated):
        d["name"] = event.name
        d["itemCount"] = event.item_count
    elif isinstance(event, ChecklistUpdated):
        d["changes"] = sorted(c.value for c in event.changes)
    elif isinstance(event, ChecklistAccessed):
        d["wasReset"] = event.was_reset
    return d


def emit(sink: EventSink | None, event: ChecklistEvent) -> None:
    if sink is not None:
        sink(event)
