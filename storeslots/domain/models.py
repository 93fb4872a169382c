"""
Domain models for store schedules, resolved days and bookable slots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, Optional, Tuple

import pendulum
from pendulum import DateTime

from .exceptions import InvalidOverride, InvalidSchedule


WEEKDAY_NAMES = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}


def day_of_week(day: date) -> int:
    """Return the weekday number of a date, Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def validate_timezone(name: str) -> str:
    """
    Ensure ``name`` resolves to an IANA timezone.

    Raises:
        InvalidSchedule: If the identifier is unknown
    """
    try:
        pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise InvalidSchedule(f"Unknown timezone identifier: '{name}'") from exc
    return name


@dataclass(frozen=True)
class WeeklyHours:
    """
    Recurring open/close window for one weekday.

    Invariant: open_time is before close_time on the same day.
    """
    day_of_week: int  # 0=Sunday, 6=Saturday
    open_time: time
    close_time: time

    def __post_init__(self):
        if self.day_of_week not in range(7):
            raise InvalidSchedule(f"day_of_week must be between 0 and 6, got {self.day_of_week}")
        if self.open_time >= self.close_time:
            raise InvalidSchedule(
                f"{WEEKDAY_NAMES[self.day_of_week]}: open time {self.open_time:%H:%M} "
                f"must be before close time {self.close_time:%H:%M}"
            )


@dataclass(frozen=True)
class DateOverride:
    """
    Replaces the weekly rule for one calendar date (holiday, exception).

    Invariant: an open override always carries a complete window, a closed
    one never does.
    """
    date: date
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    reason: str = ""

    def __post_init__(self):
        if self.is_open:
            if self.open_time is None or self.close_time is None:
                raise InvalidOverride(
                    f"Override for {self.date.isoformat()} is open but has no opening window"
                )
            if self.open_time >= self.close_time:
                raise InvalidOverride(
                    f"Override for {self.date.isoformat()}: open time {self.open_time:%H:%M} "
                    f"must be before close time {self.close_time:%H:%M}"
                )
        elif self.open_time is not None or self.close_time is not None:
            raise InvalidOverride(
                f"Override for {self.date.isoformat()} is closed but carries an opening window"
            )


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Immutable snapshot of the store's schedule.

    A refresh builds a new instance; nothing mutates an existing one, so every
    computation sees a single consistent snapshot.
    """
    timezone: str
    weekly_hours: Tuple[WeeklyHours, ...] = ()
    overrides: Tuple[DateOverride, ...] = ()
    _hours_by_day: Dict[int, WeeklyHours] = field(init=False, repr=False, compare=False)
    _overrides_by_date: Dict[date, DateOverride] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        validate_timezone(self.timezone)

        weekly_hours = tuple(self.weekly_hours)
        overrides = tuple(self.overrides)

        hours_by_day: Dict[int, WeeklyHours] = {}
        for entry in weekly_hours:
            if entry.day_of_week in hours_by_day:
                raise InvalidSchedule(
                    f"Duplicate weekly hours for {WEEKDAY_NAMES[entry.day_of_week]}"
                )
            hours_by_day[entry.day_of_week] = entry

        overrides_by_date: Dict[date, DateOverride] = {}
        for override in overrides:
            key = date(override.date.year, override.date.month, override.date.day)
            if key in overrides_by_date:
                raise InvalidOverride(f"Duplicate override for {key.isoformat()}")
            overrides_by_date[key] = override

        object.__setattr__(self, "weekly_hours", weekly_hours)
        object.__setattr__(self, "overrides", overrides)
        object.__setattr__(self, "_hours_by_day", hours_by_day)
        object.__setattr__(self, "_overrides_by_date", overrides_by_date)

    def hours_for(self, weekday: int) -> WeeklyHours | None:
        """Weekly hours for a weekday (Sunday=0), None when closed that weekday."""
        return self._hours_by_day.get(weekday)

    def override_for(self, day: date) -> DateOverride | None:
        """The override for a calendar date, if any."""
        return self._overrides_by_date.get(date(day.year, day.month, day.day))


@dataclass(frozen=True)
class ResolvedDay:
    """Open/closed decision plus effective window for one date."""
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None

    def duration_minutes(self) -> int:
        """Return the length of the open window in minutes (0 when closed)."""
        if not self.is_open:
            return 0
        return minutes_since_midnight(self.close_time) - minutes_since_midnight(self.open_time)


@dataclass(frozen=True)
class TimeSlot:
    """
    A bookable 15-minute start time on one date.
    """
    id: str  # "YYYY-MM-DD-HH:MM"
    start_time: time
    display_label: str  # e.g. "9:00 AM", in the viewer's timezone
    is_available: bool = True
    is_selected: bool = False

    @property
    def time_string(self) -> str:
        """24-hour HH:MM start time in the store's timezone."""
        return self.start_time.strftime("%H:%M")


@dataclass(frozen=True)
class Opening:
    """The next open window found for reminder scheduling."""
    date: date
    open_time: time
    close_time: time
    timezone: str

    def opens_at(self) -> DateTime:
        """Opening moment as an aware datetime in the store's timezone."""
        return pendulum.datetime(
            self.date.year,
            self.date.month,
            self.date.day,
            self.open_time.hour,
            self.open_time.minute,
            tz=self.timezone,
        )

    def __str__(self) -> str:
        weekday = WEEKDAY_NAMES[day_of_week(self.date)]
        return (
            f"{weekday}, {self.date.isoformat()} | "
            f"{self.open_time:%H:%M} - {self.close_time:%H:%M} ({self.timezone})"
        )


@dataclass(frozen=True)
class Location:
    """Viewer location as reported by the device."""
    city: str = ""
    region: str = ""
    country: str = ""
    timezone: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass(frozen=True)
class SelectionState:
    """
    The viewer's choices. Owned by the presentation layer; the engine only
    reads it.
    """
    use_alternative_timezone: bool = False
    selected_date: Optional[date] = None
    selected_slot_id: Optional[str] = None


def _weekly(day: int, open_hhmm: Tuple[int, int], close_hhmm: Tuple[int, int]) -> WeeklyHours:
    return WeeklyHours(day_of_week=day, open_time=time(*open_hhmm), close_time=time(*close_hhmm))


# Used whenever the store API cannot deliver a valid schedule.
FALLBACK_SCHEDULE = ScheduleConfig(
    timezone="America/New_York",
    weekly_hours=(
        _weekly(0, (10, 0), (18, 0)),
        _weekly(1, (9, 0), (17, 0)),
        _weekly(2, (9, 0), (17, 0)),
        _weekly(3, (9, 0), (17, 0)),
        _weekly(4, (9, 0), (17, 0)),
        _weekly(5, (9, 0), (17, 0)),
        _weekly(6, (10, 0), (16, 0)),
    ),
)
