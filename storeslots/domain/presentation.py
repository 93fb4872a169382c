"""
Human-facing strings that depend on the active timezone.

The viewer toggles between their own timezone and one alternate city. Which
city is "alternate" depends on where the viewer is: inside the New York
bounding box the alternate is Los Angeles, everywhere else it is New York.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol

from .models import Location
from .resolver import to_instant

NEW_YORK_TIMEZONE = "America/New_York"
LOS_ANGELES_TIMEZONE = "America/Los_Angeles"

# Approximate NYC metro area
NYC_BOUNDS = {
    "north": 40.9176,
    "south": 40.4774,
    "east": -73.7004,
    "west": -74.2591,
}


class TimezoneProviderProtocol(Protocol):
    """Capability that reports the viewer's current IANA timezone."""

    def current_timezone(self) -> str:
        """Return the viewer's IANA timezone identifier."""


def active_timezone(own: str, alternate: str, use_alternative: bool) -> str:
    """Pick the timezone currently used for display."""
    return alternate if use_alternative else own


def viewer_timezone(location: Optional[Location], provider: TimezoneProviderProtocol) -> str:
    """The viewer's own timezone: the location's if known, else the provider's."""
    if location is not None and location.timezone:
        return location.timezone
    return provider.current_timezone()


def is_in_nyc_area(location: Location) -> bool:
    """Check if the coordinates fall inside the NYC bounding box."""
    return (
        NYC_BOUNDS["south"] <= location.latitude <= NYC_BOUNDS["north"]
        and NYC_BOUNDS["west"] <= location.longitude <= NYC_BOUNDS["east"]
    )


def alternative_timezone(location: Optional[Location]) -> str:
    """Los Angeles for viewers in NYC, New York for everyone else."""
    if location is not None and is_in_nyc_area(location):
        return LOS_ANGELES_TIMEZONE
    return NEW_YORK_TIMEZONE


def alternative_city_name(location: Optional[Location]) -> str:
    """Short display name of the alternate city."""
    if location is not None and is_in_nyc_area(location):
        return "LA"
    return "NYC"


def format_location_for_display(location: Location) -> str:
    if location.city and location.region:
        return f"{location.city}, {location.region}"
    if location.city:
        return location.city
    if location.region:
        return location.region
    return "Current Location"


def active_city_name(location: Optional[Location], use_alternative: bool) -> str:
    """City label for the greeting in the active timezone."""
    if use_alternative:
        return alternative_city_name(location)
    if location is None:
        return "Your Area"
    return location.city or format_location_for_display(location)


def greeting(moment: datetime, city: str) -> str:
    """
    Greeting banded by hour of day.

    ``moment`` must already be expressed in the active timezone. Bands are
    half-open: [05, 10) morning, [10, 12) late morning, [12, 17) afternoon,
    [17, 21) evening, anything else night.
    """
    hour = moment.hour

    if 5 <= hour < 10:
        return f"Good Morning, {city}!"
    if 10 <= hour < 12:
        return f"Late Morning Vibes! {city}"
    if 12 <= hour < 17:
        return f"Good Afternoon, {city}!"
    if 17 <= hour < 21:
        return f"Good Evening, {city}!"
    return f"Night Owl in {city}!"


def greeting_at(moment: datetime, timezone: str, city: str) -> str:
    """Convert an instant into ``timezone`` and greet."""
    return greeting(to_instant(moment).in_timezone(timezone), city)


def format_date(moment: datetime, timezone: str) -> str:
    """Short display date, e.g. "Mon, Jan 15"."""
    return to_instant(moment).in_timezone(timezone).format("ddd, MMM D")


def format_date_for_api(moment: datetime, timezone: str) -> str:
    """Calendar date of ``moment`` in ``timezone`` as YYYY-MM-DD."""
    return to_instant(moment).in_timezone(timezone).to_date_string()


def timezone_display_name(timezone: str) -> str:
    """Last segment of an IANA id, e.g. "America/Los_Angeles" -> "Los Angeles"."""
    return timezone.split("/")[-1].replace("_", " ") or timezone


def upcoming_dates(start: date, days: int = 30) -> List[date]:
    """Consecutive calendar dates starting at ``start`` for the date picker."""
    first = date(start.year, start.month, start.day)
    return [first + timedelta(days=offset) for offset in range(days)]
