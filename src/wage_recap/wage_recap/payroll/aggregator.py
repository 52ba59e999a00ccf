"""Recap summary views.

Four independent passes over the same annotated rows (by project, by team,
by project x team, by worker). Each pass folds into a dict keyed by a composite
string key and is sorted only when finalized. None of them recompute pay: they
read ``RecapRow.wage`` / ``RecapRow.net_pay``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import (
    HELPER_TEAM_LABEL,
    REGULAR_TEAM_LABEL,
    SPECIALIST_FALLBACK_NAME,
    SPECIALIST_TEAM_LABEL,
    UNKNOWN_PROJECT_NAME,
)
from ..core.enums import AttendanceStatus, RecapMode, TeamType
from .model import ProjectSummary, ProjectTeamSummary, RecapRow, TeamSummary, WorkerSummary


def team_label(team_type: TeamType, specialist_team_name: Optional[str] = None) -> str:
    if team_type == TeamType.REGULAR:
        return REGULAR_TEAM_LABEL
    if team_type == TeamType.HELPER:
        return HELPER_TEAM_LABEL
    if team_type == TeamType.SPECIALIST:
        name = (specialist_team_name or "").strip() or SPECIALIST_FALLBACK_NAME
        return f"{SPECIALIST_TEAM_LABEL} – {name}"
    raise ValueError(f"Unsupported team type: {team_type!r}")


def team_key(team_type: TeamType, specialist_key: str = "") -> str:
    if team_type in (TeamType.REGULAR, TeamType.HELPER):
        return team_type.value
    if team_type == TeamType.SPECIALIST:
        return f"{team_type.value}:{specialist_key}"
    raise ValueError(f"Unsupported team type: {team_type!r}")


def project_display_name(row: RecapRow) -> str:
    return row.record.project_name or UNKNOWN_PROJECT_NAME


def _add_totals(acc: dict, row: RecapRow) -> None:
    acc["total_daily_wage"] += row.wage
    acc["total_kasbon"] += row.record.kasbon_amount
    acc["total_net_pay"] += row.net_pay
    acc["workers"].add(row.record.worker_key)


def summarize_by_project(rows: Sequence[RecapRow]) -> list[ProjectSummary]:
    summary_map: dict[str, dict] = {}

    for row in rows:
        key = row.record.project_id
        s = summary_map.get(key)
        if not s:
            s = {
                "project_id": key,
                "project_name": project_display_name(row),
                "total_daily_wage": 0,
                "total_kasbon": 0,
                "total_net_pay": 0,
                "workers": set(),
            }
            summary_map[key] = s
        _add_totals(s, row)

    summary = [
        ProjectSummary(
            project_id=s["project_id"],
            project_name=s["project_name"],
            total_daily_wage=s["total_daily_wage"],
            total_kasbon=s["total_kasbon"],
            total_net_pay=s["total_net_pay"],
            worker_count=len(s["workers"]),
        )
        for s in summary_map.values()
    ]
    summary.sort(key=lambda x: x.total_net_pay, reverse=True)
    return summary


def summarize_by_team(rows: Sequence[RecapRow]) -> list[TeamSummary]:
    summary_map: dict[str, dict] = {}

    for row in rows:
        rec = row.record
        key = team_key(rec.team_type, rec.specialist_key)
        s = summary_map.get(key)
        if not s:
            s = {
                "key": key,
                "label": team_label(rec.team_type, rec.specialist_team_name),
                "team_type": rec.team_type,
                "specialist_team_name": rec.specialist_team_name if rec.is_specialist else None,
                "total_daily_wage": 0,
                "total_kasbon": 0,
                "total_net_pay": 0,
                "workers": set(),
            }
            summary_map[key] = s
        _add_totals(s, row)

    summary = [
        TeamSummary(
            key=s["key"],
            label=s["label"],
            team_type=s["team_type"],
            specialist_team_name=s["specialist_team_name"],
            total_daily_wage=s["total_daily_wage"],
            total_kasbon=s["total_kasbon"],
            total_net_pay=s["total_net_pay"],
            worker_count=len(s["workers"]),
        )
        for s in summary_map.values()
    ]
    summary.sort(key=lambda x: x.total_net_pay, reverse=True)
    return summary


def summarize_by_project_team(rows: Sequence[RecapRow]) -> list[ProjectTeamSummary]:
    summary_map: dict[str, dict] = {}

    for row in rows:
        rec = row.record
        key = f"{rec.project_id}|{team_key(rec.team_type, rec.specialist_key)}"
        s = summary_map.get(key)
        if not s:
            s = {
                "key": key,
                "project_id": rec.project_id,
                "project_name": project_display_name(row),
                "team_type": rec.team_type,
                "specialist_team_name": rec.specialist_team_name if rec.is_specialist else None,
                "label": team_label(rec.team_type, rec.specialist_team_name),
                "total_daily_wage": 0,
                "total_kasbon": 0,
                "total_net_pay": 0,
                "workers": set(),
                "latest_attendance_date": None,
            }
            summary_map[key] = s
        _add_totals(s, row)
        latest = s["latest_attendance_date"]
        if latest is None or rec.attendance_date > latest:
            s["latest_attendance_date"] = rec.attendance_date

    summary = [
        ProjectTeamSummary(
            key=s["key"],
            project_id=s["project_id"],
            project_name=s["project_name"],
            team_type=s["team_type"],
            specialist_team_name=s["specialist_team_name"],
            label=s["label"],
            total_daily_wage=s["total_daily_wage"],
            total_kasbon=s["total_kasbon"],
            total_net_pay=s["total_net_pay"],
            worker_count=len(s["workers"]),
            latest_attendance_date=s["latest_attendance_date"],
        )
        for s in summary_map.values()
    ]
    # Two stable passes: net pay desc inside each project, then project name asc.
    summary.sort(key=lambda x: x.total_net_pay, reverse=True)
    summary.sort(key=lambda x: x.project_name.casefold())
    return summary


def _worker_key(row: RecapRow, recap_mode: RecapMode) -> str:
    if recap_mode == RecapMode.COMBINED:
        return row.record.worker_key
    if recap_mode == RecapMode.PER_PROJECT:
        return f"{row.record.project_id}|{row.record.worker_key}"
    raise ValueError(f"Unsupported recap mode: {recap_mode!r}")


def summarize_by_worker(rows: Sequence[RecapRow], recap_mode: RecapMode) -> list[WorkerSummary]:
    per_project = recap_mode == RecapMode.PER_PROJECT
    summary_map: dict[str, dict] = {}

    for row in rows:
        rec = row.record
        key = _worker_key(row, recap_mode)
        s = summary_map.get(key)
        if not s:
            s = {
                "key": key,
                "worker_name": rec.worker_name,
                "project_id": rec.project_id if per_project else None,
                "project_name": project_display_name(row) if per_project else None,
                "work_days": 0,
                "total_daily_wage": 0,
                "total_kasbon": 0,
                "total_net_pay": 0,
                "total_net_pay_unpaid": 0,
                "latest_attendance_date": None,
                "has_unpaid": False,
            }
            summary_map[key] = s

        if rec.status == AttendanceStatus.PRESENT:
            s["work_days"] += rec.work_days
        s["total_daily_wage"] += row.wage
        s["total_kasbon"] += rec.kasbon_amount
        s["total_net_pay"] += row.net_pay
        if not row.payroll_paid:
            s["total_net_pay_unpaid"] += row.net_pay
            s["has_unpaid"] = True
        latest = s["latest_attendance_date"]
        if latest is None or rec.attendance_date > latest:
            s["latest_attendance_date"] = rec.attendance_date

    summary = [
        WorkerSummary(
            key=s["key"],
            worker_name=s["worker_name"],
            project_id=s["project_id"],
            project_name=s["project_name"],
            work_days=s["work_days"],
            total_daily_wage=s["total_daily_wage"],
            total_kasbon=s["total_kasbon"],
            total_net_pay=s["total_net_pay"],
            total_net_pay_unpaid=s["total_net_pay_unpaid"],
            latest_attendance_date=s["latest_attendance_date"],
            payroll_paid=not s["has_unpaid"],
        )
        for s in summary_map.values()
    ]
    summary.sort(key=lambda x: (-x.total_net_pay, x.worker_name.casefold(), (x.project_name or "").casefold()))
    return summary
