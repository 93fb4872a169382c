"""
Schedules the "store opens in one hour" reminder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol

from pendulum import DateTime

from ..domain.models import ScheduleConfig
from ..domain.opening_finder import OpeningFinder, reminder_time
from ..domain.resolver import to_instant

logger = logging.getLogger(__name__)


class NotifierProtocol(Protocol):
    """Protocol describing the notification primitive the scheduler drives."""

    def schedule(self, identifier: str, fire_at: DateTime, title: str, body: str) -> None:
        """Schedule a notification, replacing any with the same identifier."""

    def cancel(self, identifier: str) -> None:
        """Cancel a pending notification."""

    def scheduled(self, now: Optional[DateTime] = None) -> List:
        """Pending notifications not yet delivered at ``now``; each has ``identifier`` and ``fire_at``."""


@dataclass(frozen=True)
class ReminderStatus:
    reminder_scheduled: bool
    next_fire_at: Optional[DateTime] = None


class ReminderScheduler:
    """
    Keeps one pre-opening reminder registered with the notifier.

    A reminder is only registered if it fires at least one minute after
    "now", so (re)registering never triggers an immediate notification.
    """

    IDENTIFIER = "store-opening-reminder"
    TITLE = "Store Opening Soon!"
    BODY = "The store will open in 1 hour. Time to get ready!"
    MIN_LEAD_MINUTES = 1

    def __init__(self, notifier: NotifierProtocol) -> None:
        self._notifier = notifier

    def schedule_opening_reminder(self, config: ScheduleConfig, now: datetime) -> DateTime | None:
        """
        Register the reminder unless one is still pending at ``now``.

        A reminder that has already fired no longer counts, so the next call
        after it schedules the following opening.

        Returns:
            Fire time of the pending reminder, or None if nothing is scheduled
        """
        pending = self._pending_fire_at(now)
        if pending is not None:
            logger.info("Store opening reminder already scheduled for %s, skipping", pending)
            return pending

        return self._schedule(config, now)

    def refresh(self, config: ScheduleConfig, now: datetime) -> DateTime | None:
        """Reschedule after a schedule change, replacing any pending reminder."""
        self.cancel()
        return self._schedule(config, now)

    def cancel(self) -> None:
        self._notifier.cancel(self.IDENTIFIER)

    def status(self, now: datetime) -> ReminderStatus:
        pending = self._pending_fire_at(now)
        return ReminderStatus(reminder_scheduled=pending is not None, next_fire_at=pending)

    def _schedule(self, config: ScheduleConfig, now: datetime) -> DateTime | None:
        now = to_instant(now)

        opening = OpeningFinder(config).next_opening(now)
        if opening is None:
            logger.info("No store opening within the next week, no reminder scheduled")
            return None

        fire_at = reminder_time(opening)
        if fire_at <= now.add(minutes=self.MIN_LEAD_MINUTES):
            logger.info("Reminder time %s is not far enough in the future, skipping", fire_at)
            return None

        self._notifier.schedule(self.IDENTIFIER, fire_at, self.TITLE, self.BODY)
        logger.info("Store opening reminder scheduled for %s (opening %s)", fire_at, opening)
        return fire_at

    def _pending_fire_at(self, now: datetime) -> DateTime | None:
        for notification in self._notifier.scheduled(to_instant(now)):
            if notification.identifier == self.IDENTIFIER:
                return notification.fire_at
        return None
