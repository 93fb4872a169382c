"""
Generates the bookable time grid for one date.
"""

from dataclasses import replace
from datetime import date, time
from typing import List, Optional, Sequence

import pendulum

from .models import ScheduleConfig, TimeSlot, minutes_since_midnight
from .resolver import ScheduleResolver

SLOT_INTERVAL_MINUTES = 15
LABEL_FORMAT = "h:mm A"  # 9:00 AM


def slot_id(day: date, start_time: time) -> str:
    """Deterministic slot id: ISO date plus 24-hour start time."""
    return f"{day.isoformat()}-{start_time:%H:%M}"


class SlotGenerator:
    """
    Splits an open window into fixed-interval start times.

    Algorithm:
    1. Resolve the date (override first, then weekly hours)
    2. Closed day -> empty list
    3. Step from open_time in 15-minute increments while strictly before close_time
    4. Render each label in the viewer's display timezone

    Open and close are wall-clock values in the store's timezone; only the
    label moves to the display timezone. Ids stay store-local so a selection
    survives a timezone toggle.
    """

    def __init__(self, config: ScheduleConfig, interval_minutes: int = SLOT_INTERVAL_MINUTES):
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be greater than zero, got {interval_minutes}")
        self.config = config
        self.resolver = ScheduleResolver(config)
        self.interval_minutes = interval_minutes

    def generate_slots(self, day: date, display_timezone: Optional[str] = None) -> List[TimeSlot]:
        """
        Produce the slots for ``day``.

        Args:
            day: Calendar date in the store's timezone
            display_timezone: IANA timezone for labels; defaults to the store's

        Returns:
            List of TimeSlot objects, empty when the store is closed
        """
        resolved = self.resolver.resolve_day(day)
        if not resolved.is_open:
            return []

        display_timezone = display_timezone or self.config.timezone

        slots: List[TimeSlot] = []
        current = minutes_since_midnight(resolved.open_time)
        close = minutes_since_midnight(resolved.close_time)

        while current < close:
            start_time = time(hour=current // 60, minute=current % 60)
            slots.append(
                TimeSlot(
                    id=slot_id(day, start_time),
                    start_time=start_time,
                    display_label=self._format_label(day, start_time, display_timezone),
                )
            )
            current += self.interval_minutes

        return slots

    def _format_label(self, day: date, start_time: time, display_timezone: str) -> str:
        store_local = pendulum.datetime(
            day.year,
            day.month,
            day.day,
            start_time.hour,
            start_time.minute,
            tz=self.config.timezone,
        )
        return store_local.in_timezone(display_timezone).format(LABEL_FORMAT)


def generate_slots(
    config: ScheduleConfig,
    day: date,
    display_timezone: Optional[str] = None,
) -> List[TimeSlot]:
    """Generate the 15-minute slots for ``day``."""
    return SlotGenerator(config).generate_slots(day, display_timezone)


def select_slot(slots: Sequence[TimeSlot], selected_id: Optional[str]) -> List[TimeSlot]:
    """
    Mark exactly one slot as selected.

    Returns new TimeSlot objects; an unknown or empty id leaves every slot
    unselected.
    """
    return [replace(slot, is_selected=slot.id == selected_id) for slot in slots]


def find_slot(slots: Sequence[TimeSlot], selected_id: Optional[str]) -> TimeSlot | None:
    """Find a previously selected slot by id after a regeneration."""
    for slot in slots:
        if slot.id == selected_id:
            return slot
    return None
