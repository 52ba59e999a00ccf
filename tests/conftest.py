from __future__ import annotations

from datetime import date
from itertools import count
from typing import Optional

import pytest

from wage_recap.attendance.model import AttendanceRecord, PayrollResetMarker
from wage_recap.core.enums import AttendanceStatus, TeamType


class InMemoryAttendance:
    def __init__(self, records=None, markers=None):
        self.records = list(records or [])
        self.markers = list(markers or [])
        self.list_calls: list[dict] = []
        self._next_id = count(1)

    def list_records(self, *, start_date=None, end_date=None):
        self.list_calls.append({"start_date": start_date, "end_date": end_date})
        return list(self.records)

    def list_reset_markers(self):
        return list(self.markers)

    def add_reset_marker(self, marker: PayrollResetMarker) -> str:
        marker_id = f"reset-{next(self._next_id)}"
        self.markers.append(marker)
        return marker_id


@pytest.fixture
def make_record():
    ids = count(1)

    def _make(
        worker_name: str = "Dedi",
        *,
        project_id: str = "P1",
        project_name: Optional[str] = "Rumah Cipete",
        team_type: TeamType = TeamType.REGULAR,
        specialist_team_name: Optional[str] = None,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        attendance_date: date = date(2026, 2, 5),
        daily_wage: int = 150000,
        kasbon_amount: int = 0,
        reimburse_amount: int = 0,
        **extra,
    ) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=extra.pop("record_id", f"r{next(ids)}"),
            project_id=project_id,
            project_name=project_name,
            worker_name=worker_name,
            team_type=team_type,
            specialist_team_name=specialist_team_name,
            status=status,
            attendance_date=attendance_date,
            daily_wage=daily_wage,
            kasbon_amount=kasbon_amount,
            reimburse_amount=reimburse_amount,
            **extra,
        )

    return _make


@pytest.fixture
def make_marker():
    def _make(
        paid_until_date: date,
        *,
        project_id: str = "P1",
        team_type: TeamType = TeamType.REGULAR,
        specialist_team_name: Optional[str] = None,
        worker_name: Optional[str] = None,
    ) -> PayrollResetMarker:
        return PayrollResetMarker(
            project_id=project_id,
            team_type=team_type,
            paid_until_date=paid_until_date,
            specialist_team_name=specialist_team_name,
            worker_name=worker_name,
        )

    return _make


@pytest.fixture
def memory_attendance():
    return InMemoryAttendance


@pytest.fixture
def fixed_today():
    return date(2026, 2, 20)
