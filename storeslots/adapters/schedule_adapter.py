"""
Converts raw store API records into the schedule domain model.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..domain.exceptions import InvalidOverride, InvalidSchedule
from ..domain.models import DateOverride, ScheduleConfig, WeeklyHours


@dataclass
class StoreData:
    """Raw weekly-hours and override records as fetched from the store API."""
    weekly_records: List[Dict[str, Any]] = field(default_factory=list)
    override_records: List[Dict[str, Any]] = field(default_factory=list)


def parse_wall_clock(value: str) -> time:
    """
    Parse "HH:MM" or "HH:MM:SS" into a minute-precision time.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Could not parse time of day: '{value}'")

    hour, minute = int(parts[0]), int(parts[1])
    return time(hour=hour, minute=minute)


def _field(record: Mapping[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in record:
        return record[snake]
    return record.get(camel, default)


def _open_flag(record: Mapping[str, Any], default: bool) -> bool:
    value = _field(record, "is_open", "isOpen", default)
    if not isinstance(value, bool):
        raise ValueError(f"is_open must be true or false, got {value!r}")
    return value


def _check_weekly_shape(record: Any) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise InvalidSchedule(
            f"Malformed weekly hours record: expected an object, got {type(record).__name__}"
        )
    return record


def convert_weekly_record(record: Mapping[str, Any]) -> WeeklyHours:
    """
    Convert one weekly-hours record.

    Record format:
    {"day_of_week": 1, "is_open": true, "start_time": "09:00", "end_time": "17:00"}
    """
    _check_weekly_shape(record)
    try:
        return WeeklyHours(
            day_of_week=int(_field(record, "day_of_week", "dayOfWeek")),
            open_time=parse_wall_clock(_field(record, "start_time", "startTime")),
            close_time=parse_wall_clock(_field(record, "end_time", "endTime")),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidSchedule(f"Malformed weekly hours record {record!r}: {exc}") from exc


def _is_open_weekly(record: Any) -> bool:
    try:
        return _open_flag(_check_weekly_shape(record), default=True)
    except ValueError as exc:
        raise InvalidSchedule(f"Malformed weekly hours record {record!r}: {exc}") from exc


def convert_weekly_records(records: Iterable[Mapping[str, Any]]) -> List[WeeklyHours]:
    """Convert weekly records, dropping the ones marked closed."""
    return [
        convert_weekly_record(record)
        for record in records
        if _is_open_weekly(record)
    ]


def convert_override_record(record: Mapping[str, Any], year: int) -> DateOverride:
    """
    Convert one override record into a dated override.

    The wire record carries day and month only. ``year`` is required and is
    used unless the record brings its own ``year``.

    Record format:
    {"day": 25, "month": 12, "is_open": false, "start_time": null, "end_time": null}
    """
    if not isinstance(record, Mapping):
        raise InvalidOverride(
            f"Malformed override record: expected an object, got {type(record).__name__}"
        )

    try:
        override_date = date(
            int(record.get("year") or year),
            int(record["month"]),
            int(record["day"]),
        )
        is_open = _open_flag(record, default=False)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidOverride(f"Malformed override record {record!r}: {exc}") from exc

    open_time: Optional[time] = None
    close_time: Optional[time] = None

    if is_open:
        raw_open = _field(record, "start_time", "startTime")
        raw_close = _field(record, "end_time", "endTime")
        try:
            open_time = parse_wall_clock(raw_open) if raw_open else None
            close_time = parse_wall_clock(raw_close) if raw_close else None
        except ValueError as exc:
            raise InvalidOverride(
                f"Override for {override_date.isoformat()} has an unparseable time: {exc}"
            ) from exc

    return DateOverride(
        date=override_date,
        is_open=is_open,
        open_time=open_time,
        close_time=close_time,
        reason=f"Override for {override_date:%m/%d}",
    )


def convert_override_records(
    records: Iterable[Mapping[str, Any]],
    year: int,
) -> List[DateOverride]:
    return [convert_override_record(record, year) for record in records]


def build_schedule_config(
    weekly_records: Iterable[Mapping[str, Any]],
    override_records: Iterable[Mapping[str, Any]],
    *,
    timezone: str,
    year: int,
) -> ScheduleConfig:
    """
    Build a fresh ScheduleConfig snapshot from raw API records.

    Raises:
        InvalidSchedule: If weekly data is malformed
        InvalidOverride: If override data is malformed
    """
    return ScheduleConfig(
        timezone=timezone,
        weekly_hours=tuple(convert_weekly_records(weekly_records)),
        overrides=tuple(convert_override_records(override_records, year)),
    )
