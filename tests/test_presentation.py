"""
Tests for the timezone presentation helpers.
"""

from datetime import date

import pendulum
import pytest

from storeslots.adapters.timezone_provider import FixedTimezoneProvider
from storeslots.domain import presentation
from storeslots.domain.models import Location

NYC_LOCATION = Location(
    city="Brooklyn",
    region="NY",
    country="US",
    timezone="America/New_York",
    latitude=40.6782,
    longitude=-73.9442,
)
CHICAGO_LOCATION = Location(
    city="Chicago",
    region="IL",
    country="US",
    timezone="America/Chicago",
    latitude=41.8781,
    longitude=-87.6298,
)


class TestGreeting:
    """Greeting bands, checked on both sides of every edge."""

    @pytest.mark.parametrize(
        "hour, minute, second, expected",
        [
            (4, 59, 59, "Night Owl in X!"),
            (5, 0, 0, "Good Morning, X!"),
            (9, 59, 59, "Good Morning, X!"),
            (10, 0, 0, "Late Morning Vibes! X"),
            (11, 59, 59, "Late Morning Vibes! X"),
            (12, 0, 0, "Good Afternoon, X!"),
            (16, 59, 59, "Good Afternoon, X!"),
            (17, 0, 0, "Good Evening, X!"),
            (20, 59, 59, "Good Evening, X!"),
            (21, 0, 0, "Night Owl in X!"),
            (0, 0, 0, "Night Owl in X!"),
        ],
    )
    def test_bands(self, hour, minute, second, expected):
        moment = pendulum.datetime(2024, 1, 1, hour, minute, second, tz="America/New_York")

        assert presentation.greeting(moment, "X") == expected

    def test_city_name_is_interpolated(self):
        moment = pendulum.datetime(2024, 1, 1, 7, 30, tz="America/Los_Angeles")

        assert presentation.greeting(moment, "Los Angeles") == "Good Morning, Los Angeles!"

    def test_greeting_at_converts_timezone(self):
        """16:30 UTC is late morning in New York but morning in Los Angeles."""
        moment = pendulum.datetime(2025, 1, 6, 16, 30, tz="UTC")

        assert presentation.greeting_at(moment, "America/New_York", "NYC") == "Late Morning Vibes! NYC"
        assert presentation.greeting_at(moment, "America/Los_Angeles", "LA") == "Good Morning, LA!"


class TestTimezoneSelection:
    """Tests for active and alternate timezone selection."""

    def test_active_timezone(self):
        assert presentation.active_timezone("Europe/Berlin", "America/New_York", False) == "Europe/Berlin"
        assert presentation.active_timezone("Europe/Berlin", "America/New_York", True) == "America/New_York"

    def test_alternate_for_nyc_viewer_is_los_angeles(self):
        assert presentation.is_in_nyc_area(NYC_LOCATION)
        assert presentation.alternative_timezone(NYC_LOCATION) == "America/Los_Angeles"
        assert presentation.alternative_city_name(NYC_LOCATION) == "LA"

    def test_alternate_elsewhere_is_new_york(self):
        assert not presentation.is_in_nyc_area(CHICAGO_LOCATION)
        assert presentation.alternative_timezone(CHICAGO_LOCATION) == "America/New_York"
        assert presentation.alternative_city_name(CHICAGO_LOCATION) == "NYC"

    def test_alternate_without_location(self):
        assert presentation.alternative_timezone(None) == "America/New_York"
        assert presentation.alternative_city_name(None) == "NYC"

    def test_bounding_box_edges_are_inclusive(self):
        corner = Location(latitude=40.9176, longitude=-74.2591)
        outside = Location(latitude=40.9177, longitude=-74.2591)

        assert presentation.is_in_nyc_area(corner)
        assert not presentation.is_in_nyc_area(outside)

    def test_viewer_timezone_prefers_location(self):
        provider = FixedTimezoneProvider("Europe/Berlin")

        assert presentation.viewer_timezone(CHICAGO_LOCATION, provider) == "America/Chicago"
        assert presentation.viewer_timezone(None, provider) == "Europe/Berlin"
        assert presentation.viewer_timezone(Location(city="Nowhere"), provider) == "Europe/Berlin"


class TestDisplayNames:
    """Tests for city and timezone display names."""

    def test_active_city_name(self):
        assert presentation.active_city_name(NYC_LOCATION, use_alternative=False) == "Brooklyn"
        assert presentation.active_city_name(NYC_LOCATION, use_alternative=True) == "LA"
        assert presentation.active_city_name(None, use_alternative=False) == "Your Area"
        assert presentation.active_city_name(Location(region="IL"), use_alternative=False) == "IL"

    def test_format_location_for_display(self):
        assert presentation.format_location_for_display(CHICAGO_LOCATION) == "Chicago, IL"
        assert presentation.format_location_for_display(Location(city="Chicago")) == "Chicago"
        assert presentation.format_location_for_display(Location(region="IL")) == "IL"
        assert presentation.format_location_for_display(Location()) == "Current Location"

    def test_timezone_display_name(self):
        assert presentation.timezone_display_name("America/Los_Angeles") == "Los Angeles"
        assert presentation.timezone_display_name("America/New_York") == "New York"
        assert presentation.timezone_display_name("UTC") == "UTC"


class TestDateFormatting:
    """Tests for date formatting and the date strip."""

    def test_format_date(self):
        moment = pendulum.datetime(2024, 1, 15, 12, 0, tz="UTC")

        assert presentation.format_date(moment, "America/New_York") == "Mon, Jan 15"

    def test_format_date_for_api_uses_timezone(self):
        """03:00 UTC on the 7th is still the 6th in New York."""
        moment = pendulum.datetime(2025, 1, 7, 3, 0, tz="UTC")

        assert presentation.format_date_for_api(moment, "America/New_York") == "2025-01-06"
        assert presentation.format_date_for_api(moment, "UTC") == "2025-01-07"

    def test_upcoming_dates(self):
        dates = presentation.upcoming_dates(date(2025, 12, 30), days=3)

        assert dates == [date(2025, 12, 30), date(2025, 12, 31), date(2026, 1, 1)]

    def test_upcoming_dates_defaults_to_thirty(self):
        dates = presentation.upcoming_dates(pendulum.date(2025, 1, 1))

        assert len(dates) == 30
        assert dates[-1] == date(2025, 1, 30)
