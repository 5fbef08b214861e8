"""Tests for pyanpyan/commands.py — validation and state transitions."""

from datetime import time

import pytest

from pyanpyan.commands import (
    CreateChecklist,
    IgnoreItemToday,
    MarkItemDone,
    ResetDailyState,
    UpdateChecklist,
)
from pyanpyan.errors import PreconditionError, ValidationError
from pyanpyan.models import (
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistItemState,
    ChecklistSchedule,
    Specific,
    StatePersistenceDuration,
)

from conftest import make_checklist


def _item(item_id: str) -> ChecklistItem:
    return ChecklistItem(id=ChecklistItemId(item_id), title=item_id.title())


def test_create_checklist_builds_fresh_entity():
    command = CreateChecklist(
        id=ChecklistId("c1"),
        name="Bedtime",
        schedule=ChecklistSchedule.always_on(),
        items=[_item("pyjamas"), _item("teeth")],
    )
    checklist = command.execute()
    assert checklist.id == ChecklistId("c1")
    assert checklist.last_accessed_at is None
    assert checklist.color is ChecklistColor.SOFT_BLUE
    assert checklist.state_persistence is StatePersistenceDuration.FIFTEEN_MINUTES
    assert [i.id.value for i in checklist.items] == ["pyjamas", "teeth"]


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_create_checklist_rejects_blank_name(name):
    with pytest.raises(ValidationError, match="Checklist name cannot be blank"):
        CreateChecklist(id=ChecklistId("c1"), name=name, schedule=ChecklistSchedule.always_on(), items=[])


@pytest.mark.parametrize("start,end", [(time(9, 0), time(8, 0)), (time(9, 0), time(9, 0))])
def test_create_checklist_rejects_non_increasing_window(start, end):
    schedule = ChecklistSchedule(time_range=Specific(start, end))
    with pytest.raises(ValidationError, match="Start time must be before end time"):
        CreateChecklist(id=ChecklistId("c1"), name="X", schedule=schedule, items=[])


def test_create_checklist_rejects_duplicate_item_ids():
    with pytest.raises(ValidationError, match="unique IDs"):
        CreateChecklist(
            id=ChecklistId("c1"),
            name="X",
            schedule=ChecklistSchedule.always_on(),
            items=[_item("a"), _item("a")],
        )


def test_validation_errors_are_value_errors():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(PreconditionError, ValueError)


def test_update_checklist_overwrites_only_given_fields():
    original = make_checklist(states=(ChecklistItemState.DONE,))
    updated = UpdateChecklist(original, name="Renamed", color=ChecklistColor.SOFT_ROSE).execute()
    assert updated.name == "Renamed"
    assert updated.color is ChecklistColor.SOFT_ROSE
    assert updated.schedule == original.schedule
    assert updated.state_persistence is original.state_persistence
    assert updated.items == original.items
    assert updated.id == original.id


def test_update_checklist_validates_supplied_fields():
    original = make_checklist()
    with pytest.raises(ValidationError):
        UpdateChecklist(original, name=" ")
    with pytest.raises(ValidationError):
        UpdateChecklist(original, schedule=ChecklistSchedule(time_range=Specific(time(10, 0), time(9, 0))))


def test_reset_daily_state():
    checklist = make_checklist(states=(ChecklistItemState.DONE, ChecklistItemState.IGNORED_TODAY))
    reset = ResetDailyState().execute(checklist)
    assert all(i.is_pending for i in reset.items)


def test_item_commands():
    item = _item("a")
    assert MarkItemDone(item.id).execute(item).state is ChecklistItemState.DONE
    assert IgnoreItemToday(item.id).execute(item).state is ChecklistItemState.IGNORED_TODAY


def test_item_command_rejects_other_item():
    with pytest.raises(PreconditionError, match="Item ID mismatch"):
        MarkItemDone(ChecklistItemId("a")).execute(_item("b"))
    with pytest.raises(PreconditionError):
        IgnoreItemToday(ChecklistItemId("a")).execute(_item("b"))
