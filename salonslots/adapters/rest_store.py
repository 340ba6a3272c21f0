"""
Read-only client for the hosted database REST API (PostgREST conventions).
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

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
    BOOKED_STATUSES,
    parse_appointment,
    parse_block,
    parse_collaborator,
    parse_operating_hours,
    parse_rows,
    parse_schedule_day,
    parse_work_schedule,
)

logger = logging.getLogger(__name__)


class RestScheduleStore:
    """
    Store that queries the ``/rest/v1/<table>`` endpoints of the hosted database.

    Filters use PostgREST syntax (``column=eq.value``). The store only reads;
    bookings are written by other parts of the application.
    """

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        url: str,
        api_key: str,
        business_id: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the REST store.

        Args:
            url: Base URL of the hosted project, e.g. ``https://xyz.example.co``
            api_key: API key sent as ``apikey`` and bearer token
            business_id: Owner ``user_id`` used to scope business-wide tables
            timeout: Request timeout in seconds
            session: Optional requests session (connection reuse, tests)
        """
        self.base_url = url.rstrip("/") + self.REST_PATH
        self.business_id = business_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Run a ``select=*`` query against a table.

        Raises:
            DataSourceError: If the request fails or returns something unexpected
        """
        url = f"{self.base_url}/{table}"
        query = {"select": "*", **params}

        logger.debug("GET %s %s", url, query)

        try:
            response = self.session.get(url, headers=self.headers, params=query, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise DataSourceError(f"Failed to fetch '{table}': {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Invalid JSON returned for '{table}': {e}") from e

        return parse_rows(data, table)

    def _business_filter(self) -> Dict[str, str]:
        return {"user_id": f"eq.{self.business_id}"} if self.business_id else {}

    def get_operating_hours(self) -> List[OperatingHoursDay]:
        rows = self._select("working_hours", {**self._business_filter(), "order": "day_of_week"})
        return [parse_operating_hours(row) for row in rows]

    def get_collaborator(self, collaborator_id: str) -> Optional[Collaborator]:
        rows = self._select("collaborators", {"id": f"eq.{collaborator_id}"})
        if not rows:
            return None
        return parse_collaborator(rows[0])

    def get_collaborator_schedule(self, collaborator_id: str) -> List[CollaboratorScheduleDay]:
        rows = self._select("collaborator_schedules", {"collaborator_id": f"eq.{collaborator_id}"})
        return [parse_schedule_day(row) for row in rows]

    def get_work_schedule(self, collaborator_id: str) -> List[WorkScheduleDay]:
        rows = self._select("collaborator_schedules", {"collaborator_id": f"eq.{collaborator_id}"})
        return parse_work_schedule(rows)

    def get_appointments(
        self,
        appointment_date: date,
        collaborator_id: Optional[str] = None,
    ) -> List[Appointment]:
        params = {
            **self._business_filter(),
            "appointment_date": f"eq.{appointment_date.isoformat()}",
            "status": f"in.({','.join(BOOKED_STATUSES)})",
        }
        if collaborator_id is not None:
            params["collaborator_id"] = f"eq.{collaborator_id}"

        rows = self._select("appointments", params)
        return [parse_appointment(row) for row in rows]

    def get_collaborator_blocks(
        self,
        collaborator_id: str,
        target_date: date,
    ) -> List[CollaboratorBlock]:
        day = target_date.isoformat()
        rows = self._select(
            "collaborator_blocks",
            {
                "collaborator_id": f"eq.{collaborator_id}",
                "start_date": f"lte.{day}",
                "end_date": f"gte.{day}",
            },
        )
        return [parse_block(row) for row in rows]
