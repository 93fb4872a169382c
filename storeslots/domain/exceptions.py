"""
Domain-specific exception hierarchy for the store schedule engine.
"""


class StoreScheduleError(Exception):
    """Base class for all application-level errors."""


class InvalidSchedule(StoreScheduleError):
    """Raised when weekly hours are malformed (open >= close, duplicate weekday, bad timezone)."""


class InvalidOverride(StoreScheduleError):
    """Raised when a date override is malformed (open without a window, duplicate date)."""


class StoreAPIError(StoreScheduleError):
    """Raised when schedule data cannot be fetched from the store API."""
