"""Tests for pyanpyan/models.py — entity transitions and JSON mapping."""

from datetime import datetime, time, timedelta, timezone

import pytest

from pyanpyan.models import (
    ALL_DAY,
    AppSettings,
    Checklist,
    ChecklistColor,
    ChecklistId,
    ChecklistItem,
    ChecklistItemId,
    ChecklistItemState,
    ChecklistSchedule,
    CompletionSound,
    DayOfWeek,
    Running,
    Specific,
    StatePersistenceDuration,
    SwipeSound,
    Timer,
    TimerId,
    TimerType,
    format_instant,
    parse_instant,
)

from conftest import make_checklist


def test_ids_must_be_non_empty():
    with pytest.raises(ValueError):
        ChecklistId("")
    assert str(ChecklistItemId("abc")) == "abc"
    assert ChecklistId("x") == ChecklistId("x")


def test_item_transitions_keep_identity():
    item = ChecklistItem(id=ChecklistItemId("a"), title="Shoes")
    done = item.mark_done()
    assert done.state is ChecklistItemState.DONE
    assert done.id == item.id and done.title == "Shoes"
    assert done.ignore_today().state is ChecklistItemState.IGNORED_TODAY
    assert done.reset().is_pending
    # original untouched
    assert item.is_pending


def test_update_item_replaces_by_id():
    checklist = make_checklist()
    updated = checklist.update_item(checklist.items[1].mark_done())
    assert [i.state for i in updated.items] == [ChecklistItemState.PENDING, ChecklistItemState.DONE]
    assert checklist.items[1].is_pending


def test_update_item_unknown_id_is_noop():
    checklist = make_checklist()
    stranger = ChecklistItem(id=ChecklistItemId("nope"), title="?", state=ChecklistItemState.DONE)
    assert checklist.update_item(stranger) == checklist


def test_reset_all_items_keeps_everything_else():
    checklist = make_checklist(
        states=(ChecklistItemState.DONE, ChecklistItemState.IGNORED_TODAY),
        last_accessed_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    reset = checklist.reset_all_items()
    assert all(i.is_pending for i in reset.items)
    assert reset.name == checklist.name
    assert reset.last_accessed_at == checklist.last_accessed_at
    assert [i.id for i in reset.items] == [i.id for i in checklist.items]


def test_all_items_settled():
    assert not make_checklist().all_items_settled
    assert make_checklist(states=(ChecklistItemState.DONE, ChecklistItemState.IGNORED_TODAY)).all_items_settled


def test_specific_contains_is_inclusive():
    window = Specific(time(8, 0), time(9, 0))
    assert window.contains(time(8, 0))
    assert window.contains(time(9, 0))
    assert not window.contains(time(9, 0, 1))
    assert ALL_DAY.contains(time(23, 59))


def test_schedule_always_on():
    assert ChecklistSchedule.always_on().is_always_on
    assert not ChecklistSchedule(days_of_week={DayOfWeek.MONDAY}).is_always_on
    assert isinstance(ChecklistSchedule(days_of_week=[DayOfWeek.MONDAY]).days_of_week, frozenset)


def test_persistence_durations():
    assert StatePersistenceDuration.FIFTEEN_MINUTES.duration == timedelta(minutes=15)
    assert StatePersistenceDuration.ZERO.duration == timedelta(0)
    assert StatePersistenceDuration.NEVER.duration is None
    assert StatePersistenceDuration.default() is StatePersistenceDuration.FIFTEEN_MINUTES


def test_checklist_to_dict_shape():
    checklist = make_checklist(
        states=(ChecklistItemState.DONE, ChecklistItemState.IGNORED_TODAY),
        last_accessed_at=datetime(2026, 2, 10, 10, 0, tzinfo=timezone.utc),
        schedule=ChecklistSchedule(
            days_of_week={DayOfWeek.FRIDAY, DayOfWeek.MONDAY},
            time_range=Specific(time(7, 0), time(8, 30)),
        ),
    )
    d = checklist.to_dict()
    assert d["id"] == "morning"
    assert d["color"] == "CALM_GREEN"
    assert d["statePersistence"] == "FIFTEEN_MINUTES"
    assert d["lastAccessedAt"] == "2026-02-10T10:00:00Z"
    assert d["schedule"] == {
        "daysOfWeek": ["MONDAY", "FRIDAY"],
        "timeRange": {"type": "Specific", "startTime": "07:00", "endTime": "08:30"},
    }
    assert d["items"][0] == {"id": "item-0", "title": "Item 0", "iconId": None, "state": {"type": "Done"}}
    assert d["items"][1]["state"] == {"type": "IgnoredToday"}


def test_checklist_from_dict_round_trip():
    checklist = make_checklist(
        states=(ChecklistItemState.DONE, ChecklistItemState.PENDING),
        last_accessed_at=datetime(2026, 2, 10, 10, 0, 5, tzinfo=timezone.utc),
        schedule=ChecklistSchedule(time_range=Specific(time(7, 0), time(8, 30))),
    )
    assert Checklist.from_dict(checklist.to_dict()) == checklist


def test_checklist_from_dict_defaults_and_unknown_keys():
    checklist = Checklist.from_dict({"id": "x", "name": "X", "somethingNew": 42})
    assert checklist.schedule.is_always_on
    assert checklist.items == ()
    assert checklist.color is ChecklistColor.SOFT_BLUE
    assert checklist.state_persistence is StatePersistenceDuration.FIFTEEN_MINUTES
    assert checklist.last_accessed_at is None


@pytest.mark.parametrize(
    "data",
    [
        {"name": "no id"},
        {"id": "x", "color": "PLAID"},
        {"id": "x", "items": [{"id": "a", "state": {"type": "Maybe"}}]},
        {"id": "x", "schedule": {"daysOfWeek": ["FUNDAY"]}},
        {"id": "x", "schedule": {"timeRange": {"type": "Sometimes"}}},
        {"id": "x", "lastAccessedAt": "yesterday"},
    ],
)
def test_checklist_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        Checklist.from_dict(data)


def test_parse_instant_variants():
    expected = datetime(2026, 2, 10, 10, 0, tzinfo=timezone.utc)
    assert parse_instant("2026-02-10T10:00:00Z") == expected
    assert parse_instant("2026-02-10T11:00:00+01:00") == expected
    assert parse_instant("2026-02-10T10:00:00") == expected
    nanos = parse_instant("2026-02-10T10:00:00.123456789Z")
    assert nanos.microsecond == 123456


def test_format_instant_converts_to_utc():
    local = datetime(2026, 2, 10, 11, 0, 0, 250000, tzinfo=timezone(timedelta(hours=1)))
    assert format_instant(local) == "2026-02-10T10:00:00.250Z"


def test_app_settings_defaults_and_font_scale():
    settings = AppSettings()
    assert settings.swipe_sound is SwipeSound.SOFT_CLICK
    assert settings.completion_sound is CompletionSound.NOTIFICATION
    assert settings.enable_haptic_feedback is True
    assert AppSettings(font_size_scale=2.0).effective_font_scale == 1.5
    assert AppSettings(font_size_scale=0.2).effective_font_scale == 0.7
    assert AppSettings(font_size_scale=1.2).effective_font_scale == 1.2


def test_app_settings_font_family():
    assert AppSettings().with_font_family("  ").font_family_name is None
    assert AppSettings().with_font_family(" Serif ").font_family_name == "Serif"


def test_app_settings_round_trip():
    settings = AppSettings(
        swipe_sound=SwipeSound.POP,
        completion_sound=CompletionSound.TADA,
        enable_haptic_feedback=False,
        font_family_name="Mono",
        font_size_scale=1.25,
    )
    assert settings.to_dict()["swipeSound"] == "pop"
    assert AppSettings.from_dict(settings.to_dict()) == settings


def test_timer_remaining_time():
    start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    timer = Timer(id=TimerId("t"), duration=timedelta(seconds=30), type=TimerType.SHORT)
    assert timer.remaining_time(start) is None

    running = timer.start(start)
    assert isinstance(running.state, Running)
    assert running.remaining_time(start + timedelta(seconds=10)) == timedelta(seconds=20)
    assert running.remaining_time(start + timedelta(minutes=5)) == timedelta(0)
    assert running.complete().remaining_time(start) is None
