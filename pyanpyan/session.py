"""Opening a checklist and acting on its items.

Opening applies the auto-reset policy: when more time than the checklist's
state persistence duration has passed since it was last opened, every item
goes back to Pending. The access timestamp is refreshed on every open.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from pyanpyan.commands import IgnoreItemToday, MarkItemDone, ResetDailyState
from pyanpyan.events import ChecklistAccessed, ChecklistCompleted, EventSink, emit
from pyanpyan.models import Checklist, ChecklistId, ChecklistItem, ChecklistItemId
from pyanpyan.repository import ChecklistRepository
from pyanpyan.result import RepositoryResult, success
from pyanpyan.workspace import now_utc

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def should_reset(checklist: Checklist, now: datetime) -> bool:
    """True when the time since the last open exceeds the persistence duration.

    A checklist that was never opened is never reset; NEVER never expires.
    """
    if checklist.last_accessed_at is None:
        return False
    threshold = checklist.state_persistence.duration
    if threshold is None:
        return False
    return _as_utc(now) - _as_utc(checklist.last_accessed_at) > threshold


def open_checklist(
    repository: ChecklistRepository,
    checklist_id: ChecklistId,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[Checklist | None]:
    """Load a checklist for display, auto-resetting it if it has gone stale.

    Returns Success(None) when the checklist does not exist. If the reset
    cannot be saved, the stored (unreset) checklist is returned instead; a
    failed timestamp refresh is logged and otherwise ignored.
    """
    if now is None:
        now = now_utc()

    loaded = repository.get_checklist(checklist_id)
    if loaded.is_failure():
        logger.error("Could not load checklist %s: %s", checklist_id, loaded.error)
        return loaded

    checklist = loaded.value
    if checklist is None:
        logger.info("Checklist %s not found", checklist_id)
        return loaded

    if should_reset(checklist, now):
        reset = ResetDailyState().execute(checklist).with_last_accessed_at(now)
        saved = repository.save_checklist(reset)
        if saved.is_failure():
            logger.warning("Reset of %s was not saved, showing stored state: %s", checklist_id, saved.error)
            return success(checklist)
        logger.info(
            "Reset %s: last opened %s, persistence %s",
            checklist_id,
            checklist.last_accessed_at,
            checklist.state_persistence.display_name,
        )
        emit(on_event, ChecklistAccessed(checklist_id, now, was_reset=True))
        return success(reset)

    touched = checklist.with_last_accessed_at(now)
    saved = repository.save_checklist(touched)
    if saved.is_failure():
        logger.warning("Could not record access time for %s: %s", checklist_id, saved.error)
    emit(on_event, ChecklistAccessed(checklist_id, now))
    return success(touched)


# ── Item actions ──────────────────────────────────────────────


def _apply_to_item(
    repository: ChecklistRepository,
    checklist: Checklist,
    item_id: ChecklistItemId,
    transition: Callable[[ChecklistItem], ChecklistItem],
    now: datetime | None,
    on_event: EventSink | None,
) -> RepositoryResult[Checklist]:
    item = checklist.find_item(item_id)
    if item is None:
        logger.warning("Item %s is not part of checklist %s", item_id, checklist.id)
        return success(checklist)

    updated = checklist.update_item(transition(item))
    saved = repository.save_checklist(updated)
    if saved.is_failure():
        logger.error("Could not save %s: %s", checklist.id, saved.error)
        return saved

    if updated.items and updated.all_items_settled and not checklist.all_items_settled:
        emit(on_event, ChecklistCompleted(checklist.id, now if now is not None else now_utc()))
    return success(updated)


def mark_item_done(
    repository: ChecklistRepository,
    checklist: Checklist,
    item_id: ChecklistItemId,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[Checklist]:
    return _apply_to_item(repository, checklist, item_id, MarkItemDone(item_id).execute, now, on_event)


def ignore_item_today(
    repository: ChecklistRepository,
    checklist: Checklist,
    item_id: ChecklistItemId,
    now: datetime | None = None,
    on_event: EventSink | None = None,
) -> RepositoryResult[Checklist]:
    return _apply_to_item(repository, checklist, item_id, IgnoreItemToday(item_id).execute, now, on_event)


def reset_item(
    repository: ChecklistRepository,
    checklist: Checklist,
    item_id: ChecklistItemId,
) -> RepositoryResult[Checklist]:
    return _apply_to_item(repository, checklist, item_id, ChecklistItem.reset, None, None)


def reset_checklist(repository: ChecklistRepository, checklist: Checklist) -> RepositoryResult[Checklist]:
    """Manually clear every item back to Pending and save."""
    reset = ResetDailyState().execute(checklist)
    return repository.save_checklist(reset).map(lambda _: reset)
