"""
In-process notification scheduler.

Stands in for the OS-level scheduling primitive (push notifications): it keeps
pending notifications keyed by identifier, the way the platform does.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pendulum import DateTime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledNotification:
    """A notification waiting to fire."""
    identifier: str
    fire_at: DateTime
    title: str
    body: str


class InMemoryNotifier:
    """Keeps at most one pending notification per identifier."""

    def __init__(self):
        self._pending: Dict[str, ScheduledNotification] = {}

    def schedule(self, identifier: str, fire_at: DateTime, title: str, body: str) -> None:
        """Schedule (or replace) the notification with ``identifier``."""
        self._pending[identifier] = ScheduledNotification(
            identifier=identifier,
            fire_at=fire_at,
            title=title,
            body=body,
        )
        logger.debug("Scheduled notification %s for %s", identifier, fire_at)

    def cancel(self, identifier: str) -> None:
        """Cancel a pending notification; unknown identifiers are ignored."""
        if self._pending.pop(identifier, None) is not None:
            logger.debug("Cancelled notification %s", identifier)

    def scheduled(self, now: Optional[DateTime] = None) -> List[ScheduledNotification]:
        """
        Pending notifications, earliest first.

        When ``now`` is given, notifications due at or before it count as
        delivered and are dropped first.
        """
        if now is not None:
            delivered = [key for key, n in self._pending.items() if n.fire_at <= now]
            for identifier in delivered:
                logger.debug("Notification %s delivered", identifier)
                del self._pending[identifier]
        return sorted(self._pending.values(), key=lambda n: n.fire_at)
