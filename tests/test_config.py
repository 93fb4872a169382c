"""
Tests for YAML configuration loading.
"""

import pytest

from storeslots.config import AppConfig, LocationConfig


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "America/New_York"
        assert config.override_year is None
        assert config.api.timeout_seconds == 10.0
        assert config.get_location() is None

    def test_load_from_yaml(self, tmp_path):
        path = _write(
            tmp_path,
            """
api:
  base_url: https://store.example.com
  timeout_seconds: 3
timezone: America/Chicago
override_year: 2025
viewer_timezone: Europe/Berlin
location:
  city: Brooklyn
  region: NY
  country: US
  timezone: America/New_York
  latitude: 40.6782
  longitude: -73.9442
""",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.api.base_url == "https://store.example.com"
        assert config.api.timeout_seconds == 3
        assert config.timezone == "America/Chicago"
        assert config.override_year == 2025
        assert config.viewer_timezone == "Europe/Berlin"
        location = config.get_location()
        assert location.city == "Brooklyn"
        assert location.latitude == pytest.approx(40.6782)

    def test_empty_file_gives_defaults(self, tmp_path):
        assert AppConfig.load_from_yaml(_write(tmp_path, "")) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_non_mapping_root(self, tmp_path):
        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(_write(tmp_path, "- one\n- two\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "timezone: [unclosed\n"))

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_unknown_viewer_timezone(self):
        with pytest.raises(ValueError):
            AppConfig(viewer_timezone="Nowhere/Special")

    def test_override_year_bounds(self):
        with pytest.raises(ValueError, match="override_year"):
            AppConfig(override_year=0)

    def test_non_positive_timeout(self):
        with pytest.raises(ValueError, match="timeout_seconds"):
            AppConfig(api={"timeout_seconds": 0})


class TestLocationConfig:
    """Tests for LocationConfig."""

    def test_latitude_out_of_range(self):
        with pytest.raises(ValueError, match="Latitude"):
            LocationConfig(latitude=91)

    def test_longitude_out_of_range(self):
        with pytest.raises(ValueError, match="Longitude"):
            LocationConfig(longitude=-181)

    def test_empty_timezone_is_allowed(self):
        assert LocationConfig(city="Somewhere").to_location().timezone == ""
