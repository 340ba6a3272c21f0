"""
Tests for domain models.
"""

from datetime import date

import pendulum
import pytest

from salonslots.domain.exceptions import ScheduleConfigurationError
from salonslots.domain.models import (
    Appointment,
    AvailabilityResult,
    Break,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    OperatingHoursDay,
    ScheduleValidationResult,
    TimeWindow,
    Weekday,
    intervals_overlap,
)


class TestWeekday:
    """Tests for the Weekday enumeration."""

    def test_sunday_first_indices(self):
        assert Weekday.SUNDAY.day_index == 0
        assert Weekday.MONDAY.day_index == 1
        assert Weekday.SATURDAY.day_index == 6

    def test_from_index_round_trip(self):
        for index in range(7):
            assert Weekday.from_index(index).day_index == index

    def test_from_index_out_of_range(self):
        with pytest.raises(ScheduleConfigurationError):
            Weekday.from_index(7)

    def test_from_date(self):
        """Weekday derivation matches the calendar."""
        assert Weekday.from_date(date(2024, 11, 24)) == Weekday.SUNDAY
        assert Weekday.from_date(date(2024, 11, 25)) == Weekday.MONDAY
        assert Weekday.from_date(date(2024, 11, 30)) == Weekday.SATURDAY

    def test_from_pendulum_date(self):
        monday = pendulum.parse("2024-11-25", tz="America/Sao_Paulo")
        assert Weekday.from_date(monday) == Weekday.MONDAY

    def test_parse_accepts_names_and_indices(self):
        assert Weekday.parse("Friday") == Weekday.FRIDAY
        assert Weekday.parse(5) == Weekday.FRIDAY
        assert Weekday.parse(Weekday.FRIDAY) == Weekday.FRIDAY

    def test_parse_unknown_name(self):
        with pytest.raises(ScheduleConfigurationError, match="Unknown weekday"):
            Weekday.parse("someday")


class TestTimeWindow:
    """Tests for TimeWindow model."""

    def test_create_valid_window(self):
        window = TimeWindow.from_times("09:00", "17:00")

        assert window.start == 540
        assert window.end == 1020
        assert window.duration_minutes() == 480

    def test_invalid_window_raises_error(self):
        with pytest.raises(ScheduleConfigurationError, match="must be before end"):
            TimeWindow.from_times("17:00", "09:00")

    def test_overlaps_is_half_open(self):
        """Windows that only touch do not overlap."""
        morning = TimeWindow.from_times("09:00", "10:00")
        late_morning = TimeWindow.from_times("09:30", "10:30")
        next_hour = TimeWindow.from_times("10:00", "11:00")

        assert morning.overlaps(late_morning)
        assert late_morning.overlaps(morning)
        assert not morning.overlaps(next_hour)
        assert not next_hour.overlaps(morning)

    def test_intervals_overlap_predicate(self):
        assert intervals_overlap(0, 10, 5, 15)
        assert intervals_overlap(0, 20, 5, 15)
        assert not intervals_overlap(0, 10, 10, 20)


class TestOperatingHoursDay:
    """Tests for OperatingHoursDay validation."""

    def test_closed_day_ignores_times(self):
        day = OperatingHoursDay(day_of_week=0, is_open=False, start_time="18:00", end_time="08:00")
        assert not day.is_open

    def test_breaks_accept_mappings(self):
        day = OperatingHoursDay(
            day_of_week=1,
            is_open=True,
            start_time="08:00",
            end_time="18:00",
            breaks=[{"start": "12:00", "end": "13:00"}],
        )
        assert day.breaks == [Break(start="12:00", end="13:00")]
        assert day.weekday == Weekday.MONDAY

    def test_open_day_requires_start_before_end(self):
        with pytest.raises(ScheduleConfigurationError):
            OperatingHoursDay(day_of_week=1, is_open=True, start_time="18:00", end_time="08:00")

    def test_open_day_requires_times(self):
        with pytest.raises(ScheduleConfigurationError, match="requires start_time and end_time"):
            OperatingHoursDay(day_of_week=1, is_open=True)

    def test_break_outside_hours_rejected(self):
        with pytest.raises(ScheduleConfigurationError, match="outside opening hours"):
            OperatingHoursDay(
                day_of_week=1,
                is_open=True,
                start_time="08:00",
                end_time="18:00",
                breaks=[Break("17:30", "18:30")],
            )

    def test_overlapping_breaks_rejected(self):
        with pytest.raises(ScheduleConfigurationError, match="Breaks overlap"):
            OperatingHoursDay(
                day_of_week=1,
                is_open=True,
                start_time="08:00",
                end_time="18:00",
                breaks=[Break("12:00", "13:00"), Break("12:30", "14:00")],
            )

    def test_invalid_day_index(self):
        with pytest.raises(ScheduleConfigurationError):
            OperatingHoursDay(day_of_week=9, is_open=False)


class TestCollaboratorScheduleDay:
    """Tests for CollaboratorScheduleDay validation."""

    def test_weekday_name_is_parsed(self):
        day = CollaboratorScheduleDay(day_of_week="monday", enabled=True, start_time="09:00", end_time="18:00")
        assert day.day_of_week == Weekday.MONDAY
        assert day.has_hours()

    def test_enabled_day_without_hours_is_allowed(self):
        day = CollaboratorScheduleDay(day_of_week="monday", enabled=True)
        assert not day.has_hours()

    def test_enabled_day_with_inverted_hours_rejected(self):
        with pytest.raises(ScheduleConfigurationError):
            CollaboratorScheduleDay(day_of_week="monday", enabled=True, start_time="18:00", end_time="09:00")


class TestAppointmentAndBlocks:
    """Tests for bookings and collaborator blocks."""

    def test_appointment_window_uses_fallback_duration(self):
        appointment = Appointment(appointment_time="10:00")
        assert appointment.window(45) == TimeWindow(start=600, end=645)

    def test_appointment_window_uses_own_duration(self):
        appointment = Appointment(appointment_time="10:00", duration_minutes=90)
        assert appointment.window(45) == TimeWindow(start=600, end=690)

    def test_appointment_rejects_non_positive_duration(self):
        with pytest.raises(ScheduleConfigurationError):
            Appointment(appointment_time="10:00", duration_minutes=0)

    def test_block_covers_inclusive_range(self):
        block = CollaboratorBlock(start_date=date(2024, 12, 23), end_date=date(2024, 12, 27), reason="Vacation")

        assert block.covers(date(2024, 12, 23))
        assert block.covers(date(2024, 12, 27))
        assert not block.covers(date(2024, 12, 28))

    def test_block_end_before_start_rejected(self):
        with pytest.raises(ScheduleConfigurationError):
            CollaboratorBlock(start_date=date(2024, 12, 27), end_date=date(2024, 12, 23))


class TestResults:
    """Tests for the two-shape result objects."""

    def test_availability_result_shapes(self):
        assert AvailabilityResult.ok().to_dict() == {"available": True}
        assert AvailabilityResult.rejected("nope").to_dict() == {"available": False, "reason": "nope"}

    def test_validation_result_shapes(self):
        assert ScheduleValidationResult.ok().to_dict() == {"valid": True}
        assert ScheduleValidationResult.failed("bad").to_dict() == {"valid": False, "error": "bad"}
