"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import pendulum
import yaml
from pendulum.tz.timezone import Timezone
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import BusinessHoursConfig


class BusinessHoursSettings(BaseModel):
    """Business hours as written in the config file."""
    day_start_hour: int = 10
    day_end_hour: int = 20
    cutoff_hour: int = 20
    slot_granularity_minutes: int = 60

    @field_validator("day_start_hour", "day_end_hour", "cutoff_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("slot_granularity_minutes")
    @classmethod
    def validate_granularity(cls, value: int) -> int:
        """Ensure slot spacing is positive."""
        if value <= 0:
            raise ValueError("slot_granularity_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "BusinessHoursSettings":
        """Ensure the configured window opens before it closes."""
        if self.day_end_hour <= self.day_start_hour:
            raise ValueError("day_end_hour must be later than day_start_hour")
        # Remaining invariants live on the domain object
        self.to_business_hours()
        return self

    def to_business_hours(self) -> BusinessHoursConfig:
        """Build the immutable domain config."""
        return BusinessHoursConfig(
            day_start_hour=self.day_start_hour,
            day_end_hour=self.day_end_hour,
            cutoff_hour=self.cutoff_hour,
            slot_granularity_minutes=self.slot_granularity_minutes,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    horizon_days: int = 3
    cutoff_shift: bool = True
    business_hours: BusinessHoursSettings = Field(default_factory=BusinessHoursSettings)
    nearest_slot_hours: BusinessHoursSettings = Field(
        default_factory=lambda: BusinessHoursSettings(day_end_hour=21)
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except ValueError as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    def get_zone(self) -> Timezone:
        """Get the configured timezone."""
        return pendulum.timezone(self.timezone)

    @field_validator("horizon_days")
    @classmethod
    def validate_horizon(cls, value: int) -> int:
        """Ensure at least one day is offered."""
        if value <= 0:
            raise ValueError("horizon_days must be greater than zero")
        return value

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

    @classmethod
    def load_or_default(cls, config_path: Path | None = None) -> "AppConfig":
        """
        Load the given config file, or the default one if it exists.

        An explicitly passed path must exist; without one, built-in defaults
        are used when no config.yaml is found.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)

        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
