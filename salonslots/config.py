"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class DefaultsConfig(BaseModel):
    """Default durations used when a caller does not pass one."""
    business_service_duration_minutes: int = 30
    collaborator_service_duration_minutes: int = 60
    slot_interval_minutes: int = 30

    @field_validator(
        "business_service_duration_minutes",
        "collaborator_service_duration_minutes",
        "slot_interval_minutes",
    )
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure durations and intervals are positive."""
        if value <= 0:
            raise ValueError(f"Value must be greater than zero, got {value}")
        return value


class DataSourceConfig(BaseModel):
    """Where schedules, collaborators and bookings are read from."""
    kind: Literal["file", "rest"] = "file"
    path: Optional[Path] = None
    url: Optional[str] = None
    api_key: Optional[str] = None
    business_id: Optional[str] = None
    timeout_seconds: float = 30

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_kind_settings(self) -> "DataSourceConfig":
        """Ensure each kind of data source carries what it needs."""
        if self.kind == "file" and self.path is None:
            raise ValueError("A file data source requires 'path'")
        if self.kind == "rest" and (not self.url or not self.api_key):
            raise ValueError("A rest data source requires 'url' and 'api_key'")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "America/Sao_Paulo"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    data_source: DataSourceConfig

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative data file paths are resolved against the config file's folder.

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

        config = cls(**data)

        source = config.data_source
        if source.path is not None and not source.path.is_absolute():
            source.path = config_path.parent / source.path

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
