"""
File-backed schedule store (YAML or JSON).

Useful for local runs and tests without access to the hosted database. The
document mirrors the database tables:

    operating_hours:        [working_hours rows]
    collaborators:          [collaborators rows]
    collaborator_schedules: [collaborator_schedules rows]
    appointments:           [appointments rows, with appointment_date]
    collaborator_blocks:    [collaborator_blocks rows]
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..domain.exceptions import DataSourceError
from ..domain.models import (
    Appointment,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    OperatingHoursDay,
    WorkScheduleDay,
)
from .rows import (
    is_booked,
    parse_appointment,
    parse_block,
    parse_collaborator,
    parse_date,
    parse_operating_hours,
    parse_rows,
    parse_schedule_day,
    parse_work_schedule,
)

logger = logging.getLogger(__name__)


class FileScheduleStore:
    """
    Store that reads all tables from a single YAML or JSON document.

    The file is read once, on construction.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Path to a ``.yaml``/``.yml`` or ``.json`` data file

        Raises:
            FileNotFoundError: If the data file doesn't exist
            DataSourceError: If the file cannot be parsed
        """
        self.path = Path(path)
        self._data = self._load(self.path)

    @staticmethod
    def _load(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise DataSourceError(f"Could not parse data file {path}: {exc}") from exc

        data = data or {}
        if not isinstance(data, dict):
            raise DataSourceError("Data file must contain a mapping at the root level.")

        logger.debug("Loaded schedule data from %s", path)
        return data

    def _table(self, name: str) -> List[Dict[str, Any]]:
        return parse_rows(self._data.get(name), name)

    def get_operating_hours(self) -> List[OperatingHoursDay]:
        days = [parse_operating_hours(row) for row in self._table("operating_hours")]
        return sorted(days, key=lambda d: d.day_of_week)

    def get_collaborators(self) -> List[Collaborator]:
        return [parse_collaborator(row) for row in self._table("collaborators")]

    def get_collaborator(self, collaborator_id: str) -> Optional[Collaborator]:
        for collaborator in self.get_collaborators():
            if collaborator.id == collaborator_id:
                return collaborator
        return None

    def _collaborator_rows(self, collaborator_id: str) -> List[Dict[str, Any]]:
        return [
            row
            for row in self._table("collaborator_schedules")
            if str(row.get("collaborator_id")) == collaborator_id
        ]

    def get_collaborator_schedule(self, collaborator_id: str) -> List[CollaboratorScheduleDay]:
        return [parse_schedule_day(row) for row in self._collaborator_rows(collaborator_id)]

    def get_work_schedule(self, collaborator_id: str) -> List[WorkScheduleDay]:
        return parse_work_schedule(self._collaborator_rows(collaborator_id))

    def get_appointments(
        self,
        appointment_date: date,
        collaborator_id: Optional[str] = None,
    ) -> List[Appointment]:
        appointments: List[Appointment] = []

        for row in self._table("appointments"):
            if not is_booked(row):
                continue
            if parse_date(row.get("appointment_date")) != appointment_date:
                continue
            if collaborator_id is not None and str(row.get("collaborator_id")) != collaborator_id:
                continue
            appointments.append(parse_appointment(row))

        logger.debug(
            "Found %d booked appointment(s) on %s for %s",
            len(appointments), appointment_date, collaborator_id or "all collaborators",
        )
        return appointments

    def get_collaborator_blocks(
        self,
        collaborator_id: str,
        target_date: date,
    ) -> List[CollaboratorBlock]:
        blocks = [
            parse_block(row)
            for row in self._table("collaborator_blocks")
            if str(row.get("collaborator_id")) == collaborator_id
        ]
        return [block for block in blocks if block.covers(target_date)]
