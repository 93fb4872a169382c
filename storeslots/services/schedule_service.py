"""
Application service holding the current schedule snapshot.

The service fetches raw store data through a client adapter, converts it to a
``ScheduleConfig`` and exposes the read API the presentation layer uses. A
refresh builds a new snapshot and swaps it in with a single assignment; each
query grabs the snapshot once and uses it throughout, so a concurrent refresh
can never produce a torn result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Protocol

from ..adapters.schedule_adapter import StoreData, build_schedule_config
from ..domain.exceptions import InvalidOverride, InvalidSchedule, StoreAPIError
from ..domain.models import FALLBACK_SCHEDULE, Opening, ResolvedDay, ScheduleConfig, TimeSlot
from ..domain.opening_finder import OpeningFinder
from ..domain.resolver import ScheduleResolver
from ..domain.slot_generator import SlotGenerator, select_slot

logger = logging.getLogger(__name__)


class StoreDataClientProtocol(Protocol):
    """Protocol describing the store client behaviour needed by the service."""

    def fetch_store_data(self) -> StoreData:
        """Return raw weekly-hours and override records."""


@dataclass(frozen=True)
class StoreStatus:
    """Open/closed right now, plus the next opening when closed."""
    is_open: bool
    next_opening: Optional[Opening] = None


class StoreScheduleService:
    """
    Owns the latest ``ScheduleConfig`` and answers schedule queries.

    Configuration errors and fetch failures never reach the caller: the
    service logs them and falls back to the default hours.
    """

    def __init__(
        self,
        store_client: StoreDataClientProtocol,
        *,
        timezone: str,
        override_year: int,
        config: ScheduleConfig = FALLBACK_SCHEDULE,
    ) -> None:
        self._store_client = store_client
        self._timezone = timezone
        self._override_year = override_year
        self._config = config
        self._using_fallback = config is FALLBACK_SCHEDULE

    @property
    def config(self) -> ScheduleConfig:
        """The latest schedule snapshot."""
        return self._config

    @property
    def using_fallback(self) -> bool:
        """True when the current snapshot is the hardcoded default schedule."""
        return self._using_fallback

    def refresh(self) -> ScheduleConfig:
        """
        Fetch and convert store data, replacing the current snapshot.

        Returns:
            The new snapshot (the fallback schedule if anything went wrong)
        """
        try:
            store_data = self._store_client.fetch_store_data()
            config = build_schedule_config(
                store_data.weekly_records,
                store_data.override_records,
                timezone=self._timezone,
                year=self._override_year,
            )
        except StoreAPIError as exc:
            logger.warning("Store API error, using fallback schedule: %s", exc)
            config, using_fallback = FALLBACK_SCHEDULE, True
        except (InvalidSchedule, InvalidOverride) as exc:
            logger.warning("Invalid store schedule data, using fallback schedule: %s", exc)
            config, using_fallback = FALLBACK_SCHEDULE, True
        else:
            logger.info(
                "Store schedule loaded: %d weekly entries, %d overrides",
                len(config.weekly_hours),
                len(config.overrides),
            )
            using_fallback = False

        self._config = config
        self._using_fallback = using_fallback
        return config

    def resolve_day(self, day: date) -> ResolvedDay:
        return ScheduleResolver(self.config).resolve_day(day)

    def is_open_at(self, moment: datetime) -> bool:
        return ScheduleResolver(self.config).is_open_at(moment)

    def store_status(self, now: datetime) -> StoreStatus:
        """Open/closed at ``now``; when closed, also the next opening."""
        config = self.config

        if ScheduleResolver(config).is_open_at(now):
            return StoreStatus(is_open=True)

        return StoreStatus(is_open=False, next_opening=OpeningFinder(config).next_opening(now))

    def time_slots(
        self,
        day: date,
        display_timezone: Optional[str] = None,
        selected_slot_id: Optional[str] = None,
    ) -> List[TimeSlot]:
        """Slots for ``day`` with the previously selected slot (if any) marked."""
        slots = SlotGenerator(self.config).generate_slots(day, display_timezone)
        return select_slot(slots, selected_slot_id)

    def next_opening(self, now: datetime) -> Opening | None:
        return OpeningFinder(self.config).next_opening(now)
