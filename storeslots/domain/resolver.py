"""
Decides whether the store is open on a date or at an instant.

Pure domain logic: the resolver only reads the ``ScheduleConfig`` snapshot it
was built with.
"""

from datetime import date, datetime

import pendulum
from pendulum import DateTime

from .exceptions import InvalidOverride
from .models import ResolvedDay, ScheduleConfig, day_of_week

CLOSED = ResolvedDay(is_open=False)


def to_instant(moment: datetime) -> DateTime:
    """
    Normalise an aware datetime to a pendulum DateTime.

    Raises:
        ValueError: If ``moment`` is naive and therefore not an instant
    """
    if moment.tzinfo is None:
        raise ValueError(f"Expected a timezone-aware instant, got naive datetime {moment}")
    if isinstance(moment, DateTime):
        return moment
    return pendulum.instance(moment)


class ScheduleResolver:
    """
    Resolves calendar dates against one schedule snapshot.

    Override precedence:
    1. A ``DateOverride`` for the date is authoritative
    2. Otherwise the weekly entry for the weekday decides
    3. No weekly entry means closed
    """

    def __init__(self, config: ScheduleConfig):
        self.config = config

    def resolve_day(self, day: date) -> ResolvedDay:
        """
        Resolve one timezone-naive calendar date in the schedule's timezone.

        Returns:
            ResolvedDay; an open day always carries both open and close times
        """
        override = self.config.override_for(day)
        if override is not None:
            if not override.is_open:
                return CLOSED
            if override.open_time is None or override.close_time is None:
                raise InvalidOverride(
                    f"Override for {day.isoformat()} is open but has no opening window"
                )
            return ResolvedDay(
                is_open=True,
                open_time=override.open_time,
                close_time=override.close_time,
            )

        hours = self.config.hours_for(day_of_week(day))
        if hours is None:
            return CLOSED

        return ResolvedDay(is_open=True, open_time=hours.open_time, close_time=hours.close_time)

    def is_open_at(self, moment: datetime) -> bool:
        """Check if the store is open at an absolute instant ([open, close))."""
        local = to_instant(moment).in_timezone(self.config.timezone)
        resolved = self.resolve_day(local.date())

        if not resolved.is_open:
            return False

        wall_clock = local.time()
        return resolved.open_time <= wall_clock < resolved.close_time


def resolve_day(config: ScheduleConfig, day: date) -> ResolvedDay:
    """Resolve ``day`` against ``config``."""
    return ScheduleResolver(config).resolve_day(day)


def is_open_at(config: ScheduleConfig, moment: datetime) -> bool:
    """Check if the store described by ``config`` is open at ``moment``."""
    return ScheduleResolver(config).is_open_at(moment)
