"""Typed dataclasses for the pyanpyan checklist domain.

Entities are frozen; every "mutator" returns a new instance.
All models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; malformed values raise ValueError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, ClassVar, Union


# ── Wire helpers ──────────────────────────────────────────────


_FRACTION_RE = re.compile(r"\.(\d+)")


def format_time(t: time) -> str:
    """'08:30', or '08:30:15' when seconds are set."""
    if t.second or t.microsecond:
        return t.isoformat()
    return t.strftime("%H:%M")


def parse_time(s: str) -> time:
    if not isinstance(s, str):
        raise ValueError(f"Invalid time: {s!r}")
    parsed = time.fromisoformat(s.strip())
    if parsed.tzinfo is not None:
        raise ValueError(f"Time of day must not carry an offset: {s!r}")
    return parsed


def format_instant(dt: datetime) -> str:
    """Render an instant as UTC ISO-8601 with a trailing 'Z'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    out = dt.strftime("%Y-%m-%dT%H:%M:%S")
    if dt.microsecond:
        if dt.microsecond % 1000 == 0:
            out += f".{dt.microsecond // 1000:03d}"
        else:
            out += f".{dt.microsecond:06d}"
    return out + "Z"


def parse_instant(s: str) -> datetime:
    """Parse '2026-02-10T10:00:00Z' style instants (offsets and up to 9 fraction digits).

    Strings without an offset are taken as UTC.
    """
    if not isinstance(s, str):
        raise ValueError(f"Invalid instant: {s!r}")
    text = s.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat wants exactly 3 or 6 fraction digits on older interpreters
    text = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _require(d: dict[str, Any], key: str) -> Any:
    if key not in d or d[key] is None:
        raise ValueError(f"Missing required field: {key}")
    return d[key]


def _ensure_dict(d: Any, what: str) -> dict[str, Any]:
    if not isinstance(d, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(d).__name__}")
    return d


def _enum_by_name(enum_cls: type[Enum], name: Any) -> Any:
    try:
        return enum_cls[name]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown {enum_cls.__name__}: {name!r}") from None


# ── Identifiers ───────────────────────────────────────────────


@dataclass(frozen=True)
class _StringId:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValueError(f"{type(self).__name__} must be a non-empty string")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChecklistId(_StringId):
    pass


@dataclass(frozen=True)
class ChecklistItemId(_StringId):
    pass


@dataclass(frozen=True)
class ItemIconId(_StringId):
    pass


# ── Enumerations ──────────────────────────────────────────────


class DayOfWeek(Enum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, d: date) -> DayOfWeek:
        return cls(d.weekday())


WEEKDAYS = frozenset(
    {DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY, DayOfWeek.FRIDAY}
)


class ChecklistColor(Enum):
    SOFT_BLUE = ("#A8D5E2", "Soft Blue")
    CALM_GREEN = ("#C8E6C9", "Calm Green")
    GENTLE_PURPLE = ("#D1C4E9", "Gentle Purple")
    WARM_PEACH = ("#FFE0B2", "Warm Peach")
    COOL_MINT = ("#B2DFDB", "Cool Mint")
    LIGHT_LAVENDER = ("#E1BEE7", "Light Lavender")
    PALE_YELLOW = ("#FFF9C4", "Pale Yellow")
    SOFT_ROSE = ("#F8BBD0", "Soft Rose")

    def __init__(self, hex_code: str, display_name: str) -> None:
        self.hex = hex_code
        self.display_name = display_name


class StatePersistenceDuration(Enum):
    """How long Done/IgnoredToday survive between two opens of a checklist."""

    ZERO = (0, "Reset immediately")
    ONE_MINUTE = (60_000, "1 minute")
    FIFTEEN_MINUTES = (900_000, "15 minutes")
    ONE_HOUR = (3_600_000, "1 hour")
    ONE_DAY = (86_400_000, "1 day")
    NEVER = (None, "Never")

    def __init__(self, milliseconds: int | None, display_name: str) -> None:
        self.milliseconds = milliseconds
        self.display_name = display_name

    @property
    def duration(self) -> timedelta | None:
        """Threshold as a timedelta; None means unbounded."""
        if self.milliseconds is None:
            return None
        return timedelta(milliseconds=self.milliseconds)

    @classmethod
    def default(cls) -> StatePersistenceDuration:
        return cls.FIFTEEN_MINUTES


class ChecklistItemState(Enum):
    PENDING = "Pending"
    DONE = "Done"
    IGNORED_TODAY = "IgnoredToday"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.value}

    @classmethod
    def from_dict(cls, d: Any) -> ChecklistItemState:
        d = _ensure_dict(d, "ChecklistItemState")
        tag = _require(d, "type")
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(f"Unknown ChecklistItemState type: {tag!r}") from None


# ── Time ranges ───────────────────────────────────────────────


@dataclass(frozen=True)
class AllDay:
    """The whole day; contains every time."""

    is_all_day: ClassVar[bool] = True

    def contains(self, t: time) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"type": "AllDay"}


ALL_DAY = AllDay()


@dataclass(frozen=True)
class Specific:
    """A start-end window within a single day, inclusive at both ends."""

    start_time: time
    end_time: time

    is_all_day: ClassVar[bool] = False

    def contains(self, t: time) -> bool:
        return self.start_time <= t <= self.end_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "Specific",
            "startTime": format_time(self.start_time),
            "endTime": format_time(self.end_time),
        }


TimeRange = Union[AllDay, Specific]


def time_range_from_dict(d: Any) -> TimeRange:
    d = _ensure_dict(d, "TimeRange")
    tag = _require(d, "type")
    if tag == "AllDay":
        return ALL_DAY
    if tag == "Specific":
        return Specific(
            start_time=parse_time(_require(d, "startTime")),
            end_time=parse_time(_require(d, "endTime")),
        )
    raise ValueError(f"Unknown TimeRange type: {tag!r}")


# ── Schedule ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ChecklistSchedule:
    """Days of week plus a time window. An empty day set means every day."""

    days_of_week: frozenset[DayOfWeek] = frozenset()
    time_range: TimeRange = ALL_DAY

    def __post_init__(self) -> None:
        if not isinstance(self.days_of_week, frozenset):
            object.__setattr__(self, "days_of_week", frozenset(self.days_of_week))

    @classmethod
    def always_on(cls) -> ChecklistSchedule:
        return cls(frozenset(), ALL_DAY)

    @property
    def is_always_on(self) -> bool:
        return not self.days_of_week and self.time_range.is_all_day

    @classmethod
    def from_dict(cls, d: Any) -> ChecklistSchedule:
        d = _ensure_dict(d, "ChecklistSchedule")
        days = d.get("daysOfWeek") or []
        if not isinstance(days, list):
            raise ValueError("daysOfWeek must be a list")
        time_range = d.get("timeRange")
        return cls(
            days_of_week=frozenset(_enum_by_name(DayOfWeek, name) for name in days),
            time_range=time_range_from_dict(time_range) if time_range is not None else ALL_DAY,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "daysOfWeek": [day.name for day in sorted(self.days_of_week, key=lambda x: x.value)],
            "timeRange": self.time_range.to_dict(),
        }


# ── Items ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ChecklistItem:
    id: ChecklistItemId
    title: str
    icon_id: ItemIconId | None = None
    state: ChecklistItemState = ChecklistItemState.PENDING

    def mark_done(self) -> ChecklistItem:
        return replace(self, state=ChecklistItemState.DONE)

    def ignore_today(self) -> ChecklistItem:
        return replace(self, state=ChecklistItemState.IGNORED_TODAY)

    def reset(self) -> ChecklistItem:
        return replace(self, state=ChecklistItemState.PENDING)

    @property
    def is_pending(self) -> bool:
        return self.state is ChecklistItemState.PENDING

    @classmethod
    def from_dict(cls, d: Any) -> ChecklistItem:
        d = _ensure_dict(d, "ChecklistItem")
        icon = d.get("iconId")
        state = d.get("state")
        return cls(
            id=ChecklistItemId(str(_require(d, "id"))),
            title=str(d.get("title", "")),
            icon_id=ItemIconId(str(icon)) if icon else None,
            state=ChecklistItemState.from_dict(state) if state is not None else ChecklistItemState.PENDING,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "title": self.title,
            "iconId": self.icon_id.value if self.icon_id else None,
            "state": self.state.to_dict(),
        }


# ── Checklist ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Checklist:
    id: ChecklistId
    name: str
    schedule: ChecklistSchedule = field(default_factory=ChecklistSchedule.always_on)
    items: tuple[ChecklistItem, ...] = ()
    color: ChecklistColor = ChecklistColor.SOFT_BLUE
    state_persistence: StatePersistenceDuration = StatePersistenceDuration.FIFTEEN_MINUTES
    last_accessed_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def update_item(self, updated: ChecklistItem) -> Checklist:
        """Replace the item with the same id; unchanged copy if there is none."""
        return replace(
            self,
            items=tuple(updated if item.id == updated.id else item for item in self.items),
        )

    def reset_all_items(self) -> Checklist:
        return replace(self, items=tuple(item.reset() for item in self.items))

    def find_item(self, item_id: ChecklistItemId) -> ChecklistItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def with_last_accessed_at(self, instant: datetime | None) -> Checklist:
        return replace(self, last_accessed_at=instant)

    @property
    def all_items_settled(self) -> bool:
        """True when no item is Pending any more."""
        return all(not item.is_pending for item in self.items)

    @classmethod
    def from_dict(cls, d: Any) -> Checklist:
        d = _ensure_dict(d, "Checklist")
        items = d.get("items") or []
        if not isinstance(items, list):
            raise ValueError("items must be a list")
        schedule = d.get("schedule")
        color = d.get("color")
        persistence = d.get("statePersistence")
        last_accessed = d.get("lastAccessedAt")
        return cls(
            id=ChecklistId(str(_require(d, "id"))),
            name=str(d.get("name", "")),
            schedule=ChecklistSchedule.from_dict(schedule) if schedule is not None else ChecklistSchedule.always_on(),
            items=tuple(ChecklistItem.from_dict(i) for i in items),
            color=_enum_by_name(ChecklistColor, color) if color is not None else ChecklistColor.SOFT_BLUE,
            state_persistence=(
                _enum_by_name(StatePersistenceDuration, persistence)
                if persistence is not None
                else StatePersistenceDuration.default()
            ),
            last_accessed_at=parse_instant(last_accessed) if last_accessed else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "schedule": self.schedule.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "color": self.color.name,
            "statePersistence": self.state_persistence.name,
            "lastAccessedAt": format_instant(self.last_accessed_at) if self.last_accessed_at else None,
        }


# ── Settings ──────────────────────────────────────────────────


FONT_SCALE_MIN = 0.7
FONT_SCALE_MAX = 1.5


class SwipeSound(Enum):
    NONE = "none"
    SOFT_CLICK = "soft_click"
    BEEP = "beep"
    POP = "pop"


class CompletionSound(Enum):
    NONE = "none"
    NOTIFICATION = "notification"
    SUCCESS_CHIME = "success_chime"
    TADA = "tada"


@dataclass(frozen=True)
class AppSettings:
    swipe_sound: SwipeSound = SwipeSound.SOFT_CLICK
    completion_sound: CompletionSound = CompletionSound.NOTIFICATION
    enable_haptic_feedback: bool = True
    font_family_name: str | None = None
    font_size_scale: float = 1.0

    @property
    def effective_font_scale(self) -> float:
        return min(max(self.font_size_scale, FONT_SCALE_MIN), FONT_SCALE_MAX)

    def with_font_family(self, name: str | None) -> AppSettings:
        """Blank names select the system default font."""
        name = name.strip() if name else ""
        return replace(self, font_family_name=name or None)

    @classmethod
    def from_dict(cls, d: Any) -> AppSettings:
        d = _ensure_dict(d, "AppSettings")
        return cls(
            swipe_sound=SwipeSound(d.get("swipeSound", SwipeSound.SOFT_CLICK.value)),
            completion_sound=CompletionSound(d.get("completionSound", CompletionSound.NOTIFICATION.value)),
            enable_haptic_feedback=bool(d.get("enableHapticFeedback", True)),
            font_family_name=d.get("fontFamilyName") or None,
            font_size_scale=float(d.get("fontSizeScale", 1.0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "swipeSound": self.swipe_sound.value,
            "completionSound": self.completion_sound.value,
            "enableHapticFeedback": self.enable_haptic_feedback,
            "fontFamilyName": self.font_family_name,
            "fontSizeScale": self.font_size_scale,
        }


# ── Timer ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerId(_StringId):
    pass


class TimerType(Enum):
    SHORT = "short"  # seconds
    LONG = "long"  # minutes


@dataclass(frozen=True)
class NotStarted:
    pass


@dataclass(frozen=True)
class Running:
    started_at: datetime


@dataclass(frozen=True)
class Completed:
    pass


TimerState = Union[NotStarted, Running, Completed]

NOT_STARTED = NotStarted()
COMPLETED = Completed()


@dataclass(frozen=True)
class Timer:
    id: TimerId
    duration: timedelta
    type: TimerType
    state: TimerState = NOT_STARTED

    def start(self, at: datetime) -> Timer:
        return replace(self, state=Running(started_at=at))

    def complete(self) -> Timer:
        return replace(self, state=COMPLETED)

    def remaining_time(self, now: datetime) -> timedelta | None:
        """Time left while running, floored at zero; None otherwise."""
        if not isinstance(self.state, Running):
            return None
        elapsed = now - self.state.started_at
        return max(self.duration - elapsed, timedelta(0))
