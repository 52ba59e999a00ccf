from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import RecapMode, TeamType


@dataclass(frozen=True)
class RecapFilters:
    date_from: date
    date_to: date
    project_id: Optional[str] = None
    team_type: Optional[TeamType] = None
    specialist_team_name: Optional[str] = None
    worker_names: tuple[str, ...] = ()
    include_already_paid: bool = False
    recap_mode: RecapMode = RecapMode.PER_PROJECT
    limit: Optional[int] = None


@dataclass(frozen=True)
class RecapRow:
    """Read-model: a filtered record annotated with its computed pay."""

    record: AttendanceRecord
    wage: int
    net_pay: int
    payroll_paid: bool = False


@dataclass(frozen=True)
class ProjectSummary:
    project_id: str
    project_name: str
    total_daily_wage: int
    total_kasbon: int
    total_net_pay: int
    worker_count: int


@dataclass(frozen=True)
class TeamSummary:
    key: str
    label: str
    team_type: TeamType
    specialist_team_name: Optional[str]
    total_daily_wage: int
    total_kasbon: int
    total_net_pay: int
    worker_count: int


@dataclass(frozen=True)
class ProjectTeamSummary:
    key: str
    project_id: str
    project_name: str
    team_type: TeamType
    specialist_team_name: Optional[str]
    label: str
    total_daily_wage: int
    total_kasbon: int
    total_net_pay: int
    worker_count: int
    latest_attendance_date: Optional[date]


@dataclass(frozen=True)
class WorkerSummary:
    """One worker row; project fields are None in COMBINED mode."""

    key: str
    worker_name: str
    project_id: Optional[str]
    project_name: Optional[str]
    work_days: int
    total_daily_wage: int
    total_kasbon: int
    total_net_pay: int
    total_net_pay_unpaid: int
    latest_attendance_date: Optional[date]
    payroll_paid: bool


@dataclass(frozen=True)
class RecapResult:
    date_from: date
    date_to: date
    recap_mode: RecapMode
    rows: list[RecapRow] = field(default_factory=list)
    project_summaries: list[ProjectSummary] = field(default_factory=list)
    team_summaries: list[TeamSummary] = field(default_factory=list)
    project_team_summaries: list[ProjectTeamSummary] = field(default_factory=list)
    worker_summaries: list[WorkerSummary] = field(default_factory=list)
    total_daily_wage: int = 0
    total_kasbon: int = 0
    total_reimburse: int = 0
    total_net_pay: int = 0
