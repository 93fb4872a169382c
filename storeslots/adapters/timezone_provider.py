"""
Viewer timezone capability.
"""

import pendulum

from ..domain.models import validate_timezone


class SystemTimezoneProvider:
    """Reports the host machine's local timezone."""

    def current_timezone(self) -> str:
        return pendulum.local_timezone().name


class FixedTimezoneProvider:
    """Always reports the same timezone (configuration override, tests)."""

    def __init__(self, timezone: str):
        self.timezone = validate_timezone(timezone)

    def current_timezone(self) -> str:
        return self.timezone
