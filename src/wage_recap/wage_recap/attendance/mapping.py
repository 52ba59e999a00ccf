"""Row -> domain mapping for loosely typed storage rows.

Storage backends hand back dicts whose values may be missing, strings, or
Decimals. Unknown enum values fall back to a safe default instead of failing
the whole snapshot.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import to_date_only
from ..common.validators import optional_text
from ..core.constants import DEFAULT_WORK_DAYS
from ..core.enums import AttendanceStatus, ReimburseType, TeamType
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, PayrollResetMarker

log = logging.getLogger(__name__)


def _to_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


def _to_amount(value: Any) -> int:
    return max(int(round(_to_number(value))), 0)


def _to_work_days(value: Any) -> int:
    days = int(_to_number(value))
    return days if days > 0 else DEFAULT_WORK_DAYS


def _enum_or(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value))
    except ValueError:
        return default


def record_from_row(row: Mapping[str, Any], project_name: Optional[str] = None) -> AttendanceRecord:
    team_type = _enum_or(TeamType, row.get("team_type"), TeamType.REGULAR)
    reimburse_type = _enum_or(ReimburseType, row.get("reimburse_type"), None)

    return AttendanceRecord(
        record_id=str(row.get("id") or ""),
        project_id=str(row.get("project_id") or ""),
        project_name=optional_text(project_name if project_name is not None else row.get("project_name")),
        worker_name=str(row.get("worker_name") or ""),
        team_type=team_type,
        specialist_team_name=optional_text(row.get("specialist_team_name")),
        status=_enum_or(AttendanceStatus, row.get("status"), AttendanceStatus.PRESENT),
        work_days=_to_work_days(row.get("work_days")),
        daily_wage=_to_amount(row.get("daily_wage")),
        overtime_hours=max(_to_number(row.get("overtime_hours")), 0.0),
        overtime_rate=_to_amount(row.get("overtime_rate")),
        kasbon_amount=_to_amount(row.get("kasbon_amount")),
        reimburse_type=reimburse_type,
        reimburse_amount=_to_amount(row.get("reimburse_amount")),
        attendance_date=to_date_only(row.get("attendance_date")),
        notes=optional_text(row.get("notes")),
        created_at=row.get("created_at"),
    )


def marker_from_row(row: Mapping[str, Any]) -> Optional[PayrollResetMarker]:
    """Map a reset row; rows with an unknown team type are skipped (None)."""

    try:
        team_type = TeamType(str(row.get("team_type")))
    except ValueError:
        log.warning("skipping payroll reset %s with unknown team_type=%r", row.get("id"), row.get("team_type"))
        return None

    return PayrollResetMarker(
        marker_id=str(row["id"]) if row.get("id") is not None else None,
        project_id=str(row.get("project_id") or ""),
        team_type=team_type,
        specialist_team_name=optional_text(row.get("specialist_team_name")),
        worker_name=optional_text(row.get("worker_name")),
        paid_until_date=to_date_only(row.get("paid_until_date")),
        created_at=row.get("created_at"),
    )


def records_from_rows(rows: Iterable[Mapping[str, Any]]) -> list[AttendanceRecord]:
    """Map a snapshot; rows with an unreadable attendance date are logged and skipped."""

    records: list[AttendanceRecord] = []
    for row in rows:
        try:
            records.append(record_from_row(row))
        except ValidationError as e:
            log.warning("skipping attendance row %s: %s", row.get("id"), e)
    return records
