from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.validators import normalize_text
from ..core.enums import AttendanceStatus, ReimburseType, TeamType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's pay entry for one date on one project.

    Net pay is never stored here; see ``payroll.calculator``.
    """

    record_id: str
    project_id: str
    worker_name: str
    team_type: TeamType
    status: AttendanceStatus
    attendance_date: date
    daily_wage: int = 0
    kasbon_amount: int = 0
    reimburse_amount: int = 0
    project_name: Optional[str] = None
    specialist_team_name: Optional[str] = None
    work_days: int = 1
    overtime_hours: float = 0
    overtime_rate: int = 0
    reimburse_type: Optional[ReimburseType] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def worker_key(self) -> str:
        return normalize_text(self.worker_name)

    @property
    def specialist_key(self) -> str:
        return normalize_text(self.specialist_team_name)

    @property
    def is_specialist(self) -> bool:
        return self.team_type == TeamType.SPECIALIST


@dataclass(frozen=True)
class PayrollResetMarker:
    """Paid-until marker for a team scope, optionally narrowed to one worker.

    Markers are append-only: a payroll confirmation adds a new one.
    """

    project_id: str
    team_type: TeamType
    paid_until_date: date
    specialist_team_name: Optional[str] = None
    worker_name: Optional[str] = None
    marker_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def matches(self, record: AttendanceRecord) -> bool:
        if self.project_id != record.project_id:
            return False
        if self.team_type != record.team_type:
            return False
        if record.is_specialist and normalize_text(self.specialist_team_name):
            if normalize_text(self.specialist_team_name) != record.specialist_key:
                return False
        if normalize_text(self.worker_name):
            if normalize_text(self.worker_name) != record.worker_key:
                return False
        return True
