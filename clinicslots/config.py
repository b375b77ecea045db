"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, time
from enum import Enum
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.slot_strategies import DEFAULT_INTERVAL_MINUTES


class StrategyName(str, Enum):
    FIXED_INTERVAL = "fixed_interval"
    DYNAMIC_DURATION = "dynamic_duration"


def _reject_sexagesimal(value):
    # Unquoted 9:00 is read by YAML as the integer 540.
    if isinstance(value, int):
        raise ValueError(
            f"Times must be quoted strings such as '09:00', got {value!r}"
        )
    return value


class PolicyOverride(BaseModel):
    """Strategy override for a practitioner, a service, or both."""
    practitioner: Optional[str] = None
    service: Optional[str] = None
    strategy: StrategyName
    interval_minutes: Optional[int] = None

    @field_validator("interval_minutes")
    @classmethod
    def validate_interval(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("interval_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_target(self) -> "PolicyOverride":
        """An override has to name at least one practitioner or service."""
        if self.practitioner is None and self.service is None:
            raise ValueError("override needs a practitioner, a service, or both")
        return self

    def specificity(self) -> int:
        """Rank: both fields > service only > practitioner only."""
        if self.practitioner is not None and self.service is not None:
            return 3
        if self.service is not None:
            return 2
        return 1

    def matches(self, practitioner_id: str, service_id: Optional[str]) -> bool:
        """Check the override against a pair, ignoring letter case."""
        if self.practitioner is not None:
            if self.practitioner.lower() != practitioner_id.lower():
                return False
        if self.service is not None:
            if service_id is None or self.service.lower() != service_id.lower():
                return False
        return True


class SlotPolicyConfig(BaseModel):
    """Which strategy applies to which practitioner/service pair."""
    default_strategy: StrategyName = StrategyName.FIXED_INTERVAL
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    overrides: List[PolicyOverride] = Field(default_factory=list)

    @field_validator("interval_minutes")
    @classmethod
    def validate_interval(cls, value: int) -> int:
        """Ensure the fixed cadence is positive."""
        if value <= 0:
            raise ValueError("interval_minutes must be greater than zero")
        return value


class DefaultsConfig(BaseModel):
    """Default settings for slot generation."""
    service_duration_minutes: int = 30

    @field_validator("service_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("service_duration_minutes must be greater than zero")
        return value


class BlockConfig(BaseModel):
    """One availability block for a configured practitioner."""
    date: date
    start: time
    end: time

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_time_format(cls, value):
        return _reject_sexagesimal(value)

    @model_validator(mode="after")
    def validate_order(self) -> "BlockConfig":
        """Ensure the block opens before it closes."""
        if self.end <= self.start:
            raise ValueError(
                f"block end {self.end} must be later than start {self.start}"
            )
        return self


class Practitioner(BaseModel):
    """Practitioner configuration."""
    id: str
    name: str = ""
    blocks: List[BlockConfig] = Field(default_factory=list)

    def display_name(self) -> str:
        return self.name or self.id


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    slot_policy: SlotPolicyConfig = Field(default_factory=SlotPolicyConfig)
    practitioners: List[Practitioner] = Field(default_factory=list)

    @field_validator("practitioners")
    @classmethod
    def validate_practitioners(cls, value: List[Practitioner]) -> List[Practitioner]:
        """Ensure practitioner ids are unique."""
        seen: set[str] = set()
        for practitioner in value:
            key = practitioner.id.lower()
            if key in seen:
                raise ValueError(f"Duplicate practitioner id detected: {practitioner.id}")
            seen.add(key)
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

    def find_practitioner(self, practitioner_id: str) -> Practitioner | None:
        """Find a practitioner by id (case-insensitive)."""
        for practitioner in self.practitioners:
            if practitioner.id.lower() == practitioner_id.lower():
                return practitioner
        return None


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
