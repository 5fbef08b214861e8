"""Seed data written on the very first read of an empty store."""

from __future__ import annotations

from pyanpyan.models import (
    ALL_DAY,
    WEEKDAYS,
    Checklist,
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistSchedule,
    ItemIconId,
    StatePersistenceDuration,
)


def create_default_checklists() -> list[Checklist]:
    return [_school_checklist()]


def _school_checklist() -> Checklist:
    items = [
        ("books", "Books in bag", None),
        ("homework", "Homework", None),
        ("pe-kit", "PE kit", None),
        ("breakfast", "Breakfast", None),
        ("brushing-teeth", "Brushing teeth", "tooth"),
    ]
    return Checklist(
        id=ChecklistId("school"),
        name="School",
        schedule=ChecklistSchedule(days_of_week=WEEKDAYS, time_range=ALL_DAY),
        items=tuple(
            ChecklistItem(
                id=ChecklistItemId(item_id),
                title=title,
                icon_id=ItemIconId(icon) if icon else None,
            )
            for item_id, title, icon in items
        ),
        color=ChecklistColor.SOFT_BLUE,
        state_persistence=StatePersistenceDuration.FIFTEEN_MINUTES,
        last_accessed_at=None,
    )
