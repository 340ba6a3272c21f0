"""
Application service for appointment availability.

The service fetches a snapshot of schedules and bookings through a data store
adapter and delegates every decision to the pure domain functions. Keeping the
store behind a protocol lets tests and the CLI plug in a file-backed store, a
REST store or a stub.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol

from ..config import DefaultsConfig
from ..domain.collaborator_schedule import (
    active_block,
    get_available_time_slots,
    is_collaborator_available,
)
from ..domain.exceptions import CollaboratorNotFoundError, ScheduleConfigurationError
from ..domain.models import (
    Appointment,
    AvailabilityResult,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    OperatingHoursDay,
    TimeWindow,
    Weekday,
)
from ..domain.slot_generator import generate_available_time_slots
from ..domain.time_utils import time_to_minutes

logger = logging.getLogger(__name__)

REASON_ALREADY_BOOKED = "Time slot already booked"


def _resolve_duration(service_duration: Optional[int], default: int) -> int:
    """Explicit durations win over the configured default, but must be positive."""
    if service_duration is None:
        return default
    if service_duration <= 0:
        raise ScheduleConfigurationError(f"Service duration must be positive, got {service_duration}")
    return service_duration


class ScheduleStoreProtocol(Protocol):
    """Protocol describing the data store behaviour needed by the service."""

    def get_operating_hours(self) -> List[OperatingHoursDay]:
        """Return the business-wide weekly operating hours."""

    def get_collaborator(self, collaborator_id: str) -> Optional[Collaborator]:
        """Return a collaborator, or None when unknown."""

    def get_collaborator_schedule(self, collaborator_id: str) -> List[CollaboratorScheduleDay]:
        """Return the collaborator's weekly schedule rows."""

    def get_appointments(
        self,
        appointment_date: date,
        collaborator_id: Optional[str] = None,
    ) -> List[Appointment]:
        """Return active bookings on a date, optionally for one collaborator."""

    def get_collaborator_blocks(
        self,
        collaborator_id: str,
        target_date: date,
    ) -> List[CollaboratorBlock]:
        """Return blocks of a collaborator that cover a date."""


class AvailabilityService:
    """
    Orchestrates data retrieval and availability decisions.

    Every call works on a fresh snapshot from the store; nothing is cached and
    nothing is locked. Call ``check_availability`` right before committing a
    booking to re-validate against the latest data.
    """

    def __init__(
        self,
        store: ScheduleStoreProtocol,
        defaults: Optional[DefaultsConfig] = None,
    ) -> None:
        self._store = store
        self._defaults = defaults or DefaultsConfig()

    def business_slots(
        self,
        target_date: date,
        service_duration: Optional[int] = None,
    ) -> List[str]:
        """Offerable start times for a date from the business operating hours."""
        duration = _resolve_duration(service_duration, self._defaults.business_service_duration_minutes)
        weekday = Weekday.from_date(target_date)

        logger.debug("Generating business slots for %s (%s, %d min)", target_date, weekday.value, duration)

        return generate_available_time_slots(
            self._store.get_operating_hours(),
            weekday.day_index,
            duration,
        )

    def collaborator_slots(
        self,
        collaborator_id: str,
        target_date: date,
        service_duration: Optional[int] = None,
    ) -> List[str]:
        """
        Conflict-free start times for a collaborator on a date.

        Inactive or blocked collaborators get no slots.
        """
        duration = _resolve_duration(service_duration, self._defaults.collaborator_service_duration_minutes)
        collaborator = self._get_collaborator(collaborator_id)

        if not collaborator.active:
            logger.debug("Collaborator %s is inactive", collaborator_id)
            return []

        block = active_block(
            self._store.get_collaborator_blocks(collaborator_id, target_date),
            target_date,
        )
        if block is not None:
            logger.debug("Collaborator %s is blocked on %s", collaborator_id, target_date)
            return []

        return get_available_time_slots(
            self._store.get_collaborator_schedule(collaborator_id),
            target_date,
            slot_interval=self._defaults.slot_interval_minutes,
            existing_appointments=self._store.get_appointments(target_date, collaborator_id),
            service_duration=duration,
        )

    def check_availability(
        self,
        collaborator_id: str,
        target_date: date,
        appointment_time: str,
        service_duration: Optional[int] = None,
    ) -> AvailabilityResult:
        """
        Decide whether a collaborator can be booked at a date and time.

        Applies the schedule rules first, then blocks, then existing bookings.
        """
        duration = _resolve_duration(service_duration, self._defaults.collaborator_service_duration_minutes)
        collaborator = self._get_collaborator(collaborator_id)

        result = is_collaborator_available(
            collaborator,
            self._store.get_collaborator_schedule(collaborator_id),
            target_date,
            appointment_time,
        )
        if not result.available:
            return result

        block = active_block(
            self._store.get_collaborator_blocks(collaborator_id, target_date),
            target_date,
        )
        if block is not None:
            reason = f"Collaborator blocked: {block.reason}" if block.reason else "Collaborator blocked"
            return AvailabilityResult.rejected(reason)

        candidate = TimeWindow.from_start(time_to_minutes(appointment_time), duration)
        for appointment in self._store.get_appointments(target_date, collaborator_id):
            if candidate.overlaps(appointment.window(duration)):
                return AvailabilityResult.rejected(REASON_ALREADY_BOOKED)

        return AvailabilityResult.ok()

    def _get_collaborator(self, collaborator_id: str) -> Collaborator:
        collaborator = self._store.get_collaborator(collaborator_id)
        if collaborator is None:
            raise CollaboratorNotFoundError(f"Unknown collaborator: '{collaborator_id}'")
        return collaborator
