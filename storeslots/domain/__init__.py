"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import InvalidOverride, InvalidSchedule, StoreAPIError, StoreScheduleError
from .models import (
    FALLBACK_SCHEDULE,
    DateOverride,
    Location,
    Opening,
    ResolvedDay,
    ScheduleConfig,
    SelectionState,
    TimeSlot,
    WeeklyHours,
)
from .opening_finder import OpeningFinder, next_opening, reminder_time
from .resolver import ScheduleResolver, is_open_at, resolve_day
from .slot_generator import SlotGenerator, find_slot, generate_slots, select_slot

__all__ = [
    "FALLBACK_SCHEDULE",
    "DateOverride",
    "InvalidOverride",
    "InvalidSchedule",
    "Location",
    "Opening",
    "OpeningFinder",
    "ResolvedDay",
    "ScheduleConfig",
    "ScheduleResolver",
    "SelectionState",
    "SlotGenerator",
    "StoreAPIError",
    "StoreScheduleError",
    "TimeSlot",
    "WeeklyHours",
    "find_slot",
    "generate_slots",
    "is_open_at",
    "next_opening",
    "reminder_time",
    "resolve_day",
    "select_slot",
]
