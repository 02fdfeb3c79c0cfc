"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, time
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.calendar import zone_exists
from .domain.models import DailyWindow, SlotConstraints
from .domain.timezone_converter import DEFAULT_FORMAT


CONFIG_FILE_NAME = "chronorange.yaml"


class SlotDefaults(BaseModel):
    """Default settings for slot generation."""
    duration_minutes: int = 30
    window_start: time = time(0, 0)
    window_end: time = time(23, 59)
    exclude_weekdays: List[int] = Field(default_factory=list)  # 0=Sunday, 6=Saturday

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("exclude_weekdays")
    @classmethod
    def validate_exclude_weekdays(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_weekdays must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @model_validator(mode="after")
    def validate_window_order(self) -> "SlotDefaults":
        """Ensure the configured window opens before it closes."""
        if self.window_end <= self.window_start:
            raise ValueError("window_end must be later than window_start")
        return self

    def to_constraints(self) -> SlotConstraints:
        """Build scheduler constraints from the defaults."""
        return SlotConstraints(
            excluded_weekdays=frozenset(self.exclude_weekdays),
            daily_window=DailyWindow(start=self.window_start, end=self.window_end),
        )


class EngineConfig(BaseModel):
    """Engine configuration."""
    timezone: str = "UTC"
    output_format: str = DEFAULT_FORMAT
    slots: SlotDefaults = Field(default_factory=SlotDefaults)
    holidays: List[date] = Field(default_factory=list)
    holidays_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the default zone exists."""
        if not zone_exists(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "EngineConfig":
        """
        Load configuration from YAML file.

        A relative ``holidays_file`` is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            EngineConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {CONFIG_FILE_NAME} file or pass --config."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        if config.holidays_file is not None and not config.holidays_file.is_absolute():
            config = config.model_copy(
                update={"holidays_file": config_path.parent / config.holidays_file}
            )

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for the config in current directory
    current_dir = Path.cwd()
    config_path = current_dir / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path
