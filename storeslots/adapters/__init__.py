"""
Adapters layer - Store API, notifications, preferences and timezone lookups.
"""

from .mock_store_client import MockStoreClient
from .notifier import InMemoryNotifier, ScheduledNotification
from .preference_store import PreferenceStore
from .schedule_adapter import StoreData, build_schedule_config
from .store_api_client import StoreAPIClient
from .timezone_provider import FixedTimezoneProvider, SystemTimezoneProvider

__all__ = [
    "FixedTimezoneProvider",
    "InMemoryNotifier",
    "MockStoreClient",
    "PreferenceStore",
    "ScheduledNotification",
    "StoreAPIClient",
    "StoreData",
    "SystemTimezoneProvider",
    "build_schedule_config",
]
