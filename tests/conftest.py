"""Shared test fixtures for pyanpyan tests."""

from __future__ import annotations

import os
from datetime import datetime, time, timezone
from pathlib import Path

import pytest
import yaml

from pyanpyan.models import (
    ALL_DAY,
    WEEKDAYS,
    Checklist,
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistItemState,
    ChecklistSchedule,
    DayOfWeek,
    Specific,
    StatePersistenceDuration,
)

# 2024-01-01 was a Monday
MONDAY_MORNING = datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)
SATURDAY_MORNING = datetime(2024, 1, 6, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with config.yaml and an empty data dir."""
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    config = {"timezone": "UTC", "log_level": "debug"}
    (root / "config.yaml").write_text(
        yaml.dump(config, default_flow_style=False), encoding="utf-8"
    )

    # Set env var
    os.environ["PYANPYAN_ROOT"] = str(root)
    yield root
    # Cleanup
    if "PYANPYAN_ROOT" in os.environ:
        del os.environ["PYANPYAN_ROOT"]


def make_checklist(
    checklist_id: str = "morning",
    name: str = "Morning",
    states: tuple[ChecklistItemState, ...] = (ChecklistItemState.PENDING, ChecklistItemState.PENDING),
    persistence: StatePersistenceDuration = StatePersistenceDuration.FIFTEEN_MINUTES,
    last_accessed_at: datetime | None = None,
    schedule: ChecklistSchedule | None = None,
) -> Checklist:
    return Checklist(
        id=ChecklistId(checklist_id),
        name=name,
        schedule=schedule or ChecklistSchedule.always_on(),
        items=tuple(
            ChecklistItem(id=ChecklistItemId(f"item-{i}"), title=f"Item {i}", state=state)
            for i, state in enumerate(states)
        ),
        color=ChecklistColor.CALM_GREEN,
        state_persistence=persistence,
        last_accessed_at=last_accessed_at,
    )


@pytest.fixture
def morning() -> Checklist:
    """Weekday 07:00-09:00 checklist with one item done and one pending."""
    return make_checklist(
        states=(ChecklistItemState.DONE, ChecklistItemState.PENDING),
        schedule=ChecklistSchedule(
            days_of_week=WEEKDAYS,
            time_range=Specific(time(7, 0), time(9, 0)),
        ),
    )


@pytest.fixture
def weekend() -> Checklist:
    return make_checklist(
        checklist_id="weekend",
        name="Weekend chores",
        schedule=ChecklistSchedule(
            days_of_week=frozenset({DayOfWeek.SATURDAY, DayOfWeek.SUNDAY}),
            time_range=ALL_DAY,
        ),
    )
