"""Listing, creating, editing and deleting checklists."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from pyanpyan.activity import partition_by_activity
from pyanpyan.commands import CreateChecklist, UpdateChecklist, validate_unique_item_ids
from pyanpyan.events import ChecklistCreated, ChecklistDeleted, ChecklistUpdated, EventSink, detect_changes, emit
from pyanpyan.models import (
    Checklist,
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistSchedule,
    StatePersistenceDuration,
)
from pyanpyan.repository import ChecklistRepository
from pyanpyan.result import RepositoryResult, success
from pyanpyan.workspace import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Library:
    active: list[Checklist] = field(default_factory=list)
    inactive: list[Checklist] = field(default_factory=list)


def load_library(repository: ChecklistRepository, now_local: datetime) -> RepositoryResult[Library]:
    """All checklists split into active / inactive at local time *now_local*."""

    def _split(checklists: list[Checklist]) -> Library:
        active, inactive = partition_by_activity(checklists, now_local)
        return Library(active=active, inactive=inactive)

    return repository.get_all_checklists().map(_split)


def _new_id() -> str:
    return str(uuid.uuid4())


def build_checklist(
    name: str,
    item_titles: Iterable[str],
    schedule: ChecklistSchedule | None = None,
    color: ChecklistColor = ChecklistColor.SOFT_BLUE,
    state_persistence: StatePersistenceDuration = StatePersistenceDuration.FIFTEEN_MINUTES,
    checklist_id: ChecklistId | None = None,
) -> Checklist:
    """Build a new checklist from form input.

    Titles are trimmed and blank ones dropped; every item gets a fresh id.
    Raises ValidationError for a blank name or an inverted time range.
    """
    items = [
        ChecklistItem(id=ChecklistItemId(_new_id()), title=title.strip())
        for title in item_titles
        if title and title.strip()
    ]
    command = CreateChecklist(
        id=checklist_id or ChecklistId(_new_id()),
        name=name.strip(),
        schedule=schedule or ChecklistSchedule.always_on(),
        items=items,
        color=color,
        state_persistence=state_persistence,
    )
    return command.execute()


def create_checklist(
    repository: ChecklistRepository,
    command: CreateChecklist,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[Checklist]:
    checklist = command.execute()
    saved = repository.save_checklist(checklist)
    if saved.is_failure():
        return saved
    logger.info("Created checklist %s (%s)", checklist.id, checklist.name)
    emit(on_event, ChecklistCreated(checklist.id, now or now_utc(), checklist.name, len(checklist.items)))
    return success(checklist)


def update_checklist(
    repository: ChecklistRepository,
    command: UpdateChecklist,
    items: Iterable[ChecklistItem] | None = None,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[Checklist]:
    """Apply *command* (and optionally a new item list) and save.

    Raises ValidationError when the new item list repeats an id.
    """
    before = command.checklist
    after = command.execute()
    if items is not None:
        items = tuple(items)
        validate_unique_item_ids(items)
        after = replace(after, items=items)
    changes = detect_changes(before, after)
    saved = repository.save_checklist(after)
    if saved.is_failure():
        return saved
    if changes:
        emit(on_event, ChecklistUpdated(after.id, now or now_utc(), changes))
    return success(after)


def delete_checklist(
    repository: ChecklistRepository,
    checklist_id: ChecklistId,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[None]:
    deleted = repository.delete_checklist(checklist_id)
    if deleted.is_success():
        logger.info("Deleted checklist %s", checklist_id)
        emit(on_event, ChecklistDeleted(checklist_id, now or now_utc()))
    return deleted
