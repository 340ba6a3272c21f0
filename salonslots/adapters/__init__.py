"""
Adapters layer - Data sources for schedules, collaborators and bookings.
"""

from pathlib import Path

from ..config import DataSourceConfig
from .file_store import FileScheduleStore
from .rest_store import RestScheduleStore

__all__ = ["FileScheduleStore", "RestScheduleStore", "create_store"]


def create_store(config: DataSourceConfig):
    """Build the store described by the data source configuration."""
    if config.kind == "rest":
        return RestScheduleStore(
            url=config.url,
            api_key=config.api_key,
            business_id=config.business_id,
            timeout=config.timeout_seconds,
        )
    return FileScheduleStore(Path(config.path))
