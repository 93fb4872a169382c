"""
Finds the next open window and the instant of the pre-opening reminder.
"""

from datetime import date, datetime
from typing import Optional

from pendulum import DateTime

from .models import Opening, ScheduleConfig
from .resolver import ScheduleResolver, to_instant

SCAN_DAYS = 7
REMINDER_LEAD_MINUTES = 60


class OpeningFinder:
    """
    Scans forward from an instant for the nearest future opening.

    The scan is bounded to one week so it terminates even when every date is
    overridden closed.
    """

    def __init__(self, config: ScheduleConfig, scan_days: int = SCAN_DAYS):
        self.config = config
        self.resolver = ScheduleResolver(config)
        self.scan_days = scan_days

    def next_opening(self, from_moment: datetime) -> Opening | None:
        """
        Find the next opening at or after ``from_moment``.

        Today counts only if its open time is still strictly ahead of the
        current wall-clock time. Then up to ``scan_days`` following dates are
        checked.

        Returns:
            Opening, or None when nothing opens within the scan window
        """
        local = to_instant(from_moment).in_timezone(self.config.timezone)
        today = local.date()

        resolved = self.resolver.resolve_day(today)
        if resolved.is_open and resolved.open_time > local.time():
            return self._opening(today, resolved.open_time, resolved.close_time)

        for offset in range(1, self.scan_days + 1):
            candidate = today.add(days=offset)
            resolved = self.resolver.resolve_day(candidate)
            if resolved.is_open:
                return self._opening(candidate, resolved.open_time, resolved.close_time)

        return None

    def reminder_time(self, opening: Opening) -> DateTime:
        """
        The reminder instant: one hour before the opening, in UTC.

        Subtraction happens on the full local datetime, so a 00:30 opening
        reminds at 23:30 on the previous calendar day.
        """
        return reminder_time(opening)

    def _opening(self, day: date, open_time, close_time) -> Opening:
        return Opening(
            date=date(day.year, day.month, day.day),
            open_time=open_time,
            close_time=close_time,
            timezone=self.config.timezone,
        )


def next_opening(
    config: ScheduleConfig,
    from_moment: datetime,
    scan_days: int = SCAN_DAYS,
) -> Optional[Opening]:
    """Find the next opening for ``config`` after ``from_moment``."""
    return OpeningFinder(config, scan_days=scan_days).next_opening(from_moment)


def reminder_time(opening: Opening, lead_minutes: int = REMINDER_LEAD_MINUTES) -> DateTime:
    """Absolute instant ``lead_minutes`` before ``opening`` opens."""
    reminder_local = opening.opens_at().subtract(minutes=lead_minutes)
    return reminder_local.in_timezone("UTC")
