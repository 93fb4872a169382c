"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .reminders import NotifierProtocol, ReminderScheduler, ReminderStatus
from .schedule_service import StoreDataClientProtocol, StoreScheduleService, StoreStatus

__all__ = [
    "NotifierProtocol",
    "ReminderScheduler",
    "ReminderStatus",
    "StoreDataClientProtocol",
    "StoreScheduleService",
    "StoreStatus",
]
