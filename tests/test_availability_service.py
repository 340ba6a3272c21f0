"""
Tests for the AvailabilityService orchestration layer.
"""

from datetime import date
from typing import Dict, List, Optional

import pytest

from salonslots.config import DefaultsConfig
from salonslots.domain.exceptions import CollaboratorNotFoundError, ScheduleConfigurationError
from salonslots.domain.models import (
    Appointment,
    Break,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    OperatingHoursDay,
)
from salonslots.services.availability_service import REASON_ALREADY_BOOKED, AvailabilityService

MONDAY = date(2024, 11, 25)
SUNDAY = date(2024, 11, 24)


class StubScheduleStore:
    """Minimal stub matching ScheduleStoreProtocol."""

    def __init__(
        self,
        appointments: Optional[List[Appointment]] = None,
        blocks: Optional[List[CollaboratorBlock]] = None,
    ):
        self._collaborators: Dict[str, Collaborator] = {
            "ana": Collaborator(id="ana", name="Ana", active=True),
            "bruno": Collaborator(id="bruno", name="Bruno", active=False),
        }
        self._appointments = appointments or []
        self._blocks = blocks or []
        self.calls: List[tuple] = []

    def get_operating_hours(self):
        return [
            OperatingHoursDay(day_of_week=0, is_open=False),
            OperatingHoursDay(
                day_of_week=1,
                is_open=True,
                start_time="08:00",
                end_time="18:00",
                breaks=[Break("12:00", "13:00")],
            ),
        ]

    def get_collaborator(self, collaborator_id):
        return self._collaborators.get(collaborator_id)

    def get_collaborator_schedule(self, collaborator_id):
        return [
            CollaboratorScheduleDay(day_of_week="monday", enabled=True, start_time="09:00", end_time="12:00"),
        ]

    def get_appointments(self, appointment_date, collaborator_id=None):
        self.calls.append(("appointments", appointment_date, collaborator_id))
        return list(self._appointments)

    def get_collaborator_blocks(self, collaborator_id, target_date):
        return [block for block in self._blocks if block.covers(target_date)]


def _build_service(**kwargs) -> AvailabilityService:
    return AvailabilityService(store=StubScheduleStore(**kwargs))


class TestBusinessSlots:
    """Business-hours slots through the service."""

    def test_uses_configured_default_duration(self):
        service = AvailabilityService(
            store=StubScheduleStore(),
            defaults=DefaultsConfig(business_service_duration_minutes=60),
        )

        slots = service.business_slots(MONDAY)

        assert "11:00" in slots
        assert "11:30" not in slots
        assert slots[-1] == "17:00"

    def test_closed_day(self):
        assert _build_service().business_slots(SUNDAY) == []

    def test_zero_duration_is_not_replaced_by_default(self):
        with pytest.raises(ScheduleConfigurationError):
            _build_service().business_slots(MONDAY, service_duration=0)


class TestCollaboratorSlots:
    """Collaborator slots through the service."""

    def test_prunes_existing_bookings(self):
        service = _build_service(appointments=[Appointment(appointment_time="10:00", duration_minutes=60)])

        slots = service.collaborator_slots("ana", MONDAY)

        assert slots == ["09:00", "11:00", "11:30", "12:00"]

    def test_queries_bookings_of_that_collaborator(self):
        store = StubScheduleStore()
        AvailabilityService(store=store).collaborator_slots("ana", MONDAY)

        assert store.calls == [("appointments", MONDAY, "ana")]

    def test_inactive_collaborator_gets_no_slots(self):
        assert _build_service().collaborator_slots("bruno", MONDAY) == []

    def test_blocked_collaborator_gets_no_slots(self):
        block = CollaboratorBlock(start_date=MONDAY, end_date=MONDAY, reason="Course")
        assert _build_service(blocks=[block]).collaborator_slots("ana", MONDAY) == []

    def test_unknown_collaborator_raises(self):
        with pytest.raises(CollaboratorNotFoundError):
            _build_service().collaborator_slots("nobody", MONDAY)

    def test_zero_duration_raises(self):
        with pytest.raises(ScheduleConfigurationError):
            _build_service().collaborator_slots("ana", MONDAY, service_duration=0)


class TestCheckAvailability:
    """Availability decisions through the service."""

    def test_free_slot_is_available(self):
        assert _build_service().check_availability("ana", MONDAY, "10:00").available

    def test_schedule_rules_come_first(self):
        result = _build_service().check_availability("ana", MONDAY, "13:00")

        assert not result.available
        assert result.reason == "Collaborator works from 09:00 to 12:00"

    def test_blocked_day(self):
        block = CollaboratorBlock(start_date=MONDAY, end_date=MONDAY, reason="Course")

        result = _build_service(blocks=[block]).check_availability("ana", MONDAY, "10:00")

        assert not result.available
        assert result.reason == "Collaborator blocked: Course"

    def test_booked_slot_is_rejected(self):
        service = _build_service(appointments=[Appointment(appointment_time="10:00", duration_minutes=60)])

        result = service.check_availability("ana", MONDAY, "09:30")

        assert not result.available
        assert result.reason == REASON_ALREADY_BOOKED

    def test_adjacent_booking_does_not_conflict(self):
        service = _build_service(appointments=[Appointment(appointment_time="10:00", duration_minutes=60)])

        assert service.check_availability("ana", MONDAY, "09:00").available
        assert service.check_availability("ana", MONDAY, "11:00").available

    def test_zero_duration_raises_instead_of_using_default(self):
        """An explicit 0 must not fall back to the configured 60 minutes."""
        service = _build_service(appointments=[Appointment(appointment_time="10:00", duration_minutes=60)])

        with pytest.raises(ScheduleConfigurationError, match="must be positive"):
            service.check_availability("ana", MONDAY, "09:30", service_duration=0)

    def test_explicit_duration_overrides_default(self):
        service = _build_service(appointments=[Appointment(appointment_time="10:00", duration_minutes=60)])

        assert service.check_availability("ana", MONDAY, "09:30", service_duration=30).available
