"""
Shared fixtures: a small salon data file and a config pointing at it.
"""

from pathlib import Path

import pytest

SALON_DATA = """
operating_hours:
  - {day_of_week: 0, is_open: false}
  - day_of_week: 1
    is_open: true
    start_time: "08:00:00"
    end_time: "18:00:00"
    breaks:
      - {start: "12:00", end: "13:00"}
  - {day_of_week: 2, is_open: true}

collaborators:
  - {id: ana, name: Ana, active: true}
  - {id: bruno, name: Bruno, active: false}
  - {id: carla, name: Carla}

collaborator_schedules:
  - {collaborator_id: ana, day_of_week: monday, enabled: true, start_time: "09:00:00", end_time: "12:00:00"}
  - {collaborator_id: ana, day_of_week: tuesday, enabled: true, start_time: "09:00", end_time: "18:00"}
  - {collaborator_id: bruno, day_of_week: monday, enabled: true, start_time: "10:00", end_time: "16:00"}

appointments:
  - {appointment_date: "2024-11-25", appointment_time: "10:00", duration_minutes: 60, collaborator_id: ana, status: agendado}
  - {appointment_date: "2024-11-25", appointment_time: "11:30:00", collaborator_id: ana, status: cancelado}
  - {appointment_date: "2024-11-26", appointment_time: "09:00", collaborator_id: ana, status: confirmado}
  - {appointment_date: "2024-11-25", appointment_time: "10:00", collaborator_id: bruno, status: confirmado}

collaborator_blocks:
  - {collaborator_id: ana, start_date: "2024-12-23", end_date: "2024-12-27", reason: Vacation}
"""


@pytest.fixture
def data_file(tmp_path) -> Path:
    path = tmp_path / "salon_data.yaml"
    path.write_text(SALON_DATA, encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path, data_file) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "timezone: America/Sao_Paulo\n"
        "defaults:\n"
        "  business_service_duration_minutes: 30\n"
        "  collaborator_service_duration_minutes: 60\n"
        "  slot_interval_minutes: 30\n"
        "data_source:\n"
        "  kind: file\n"
        f"  path: {data_file.name}\n",
        encoding="utf-8",
    )
    return path
