"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.exceptions import InvalidSchedule
from .domain.models import Location, validate_timezone


def _check_timezone(value: str) -> str:
    try:
        return validate_timezone(value)
    except InvalidSchedule as exc:
        raise ValueError(str(exc)) from exc


class ApiConfig(BaseModel):
    """Store API connection settings."""
    base_url: str = "https://coding-challenge-pd-1a25b1a14f34.herokuapp.com"
    timeout_seconds: float = 10.0

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the request timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value


class LocationConfig(BaseModel):
    """Viewer location (normally reported by the device)."""
    city: str = ""
    region: str = ""
    country: str = ""
    timezone: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        if not -90 <= v <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {v}")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        if not -180 <= v <= 180:
            raise ValueError(f"Longitude must be between -180 and 180, got {v}")
        return v

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        return _check_timezone(v) if v else v

    def to_location(self) -> Location:
        """Get the domain Location."""
        return Location(
            city=self.city,
            region=self.region,
            country=self.country,
            timezone=self.timezone,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    timezone: str = "America/New_York"
    override_year: Optional[int] = None
    location: Optional[LocationConfig] = None
    viewer_timezone: Optional[str] = None
    preferences_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_store_timezone(cls, value: str) -> str:
        """Ensure the store timezone is a known IANA identifier."""
        return _check_timezone(value)

    @field_validator("viewer_timezone")
    @classmethod
    def validate_viewer_timezone(cls, value: Optional[str]) -> Optional[str]:
        return _check_timezone(value) if value else None

    @field_validator("override_year")
    @classmethod
    def validate_override_year(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 1 <= value <= 9999:
            raise ValueError(f"override_year must be between 1 and 9999, got {value}")
        return value

    def get_location(self) -> Location | None:
        return self.location.to_location() if self.location else None

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of storeslots/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
