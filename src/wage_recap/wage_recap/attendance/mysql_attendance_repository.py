from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .mapping import marker_from_row, records_from_rows
from .model import AttendanceRecord, PayrollResetMarker
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("DATE(ar.attendance_date) >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("DATE(ar.attendance_date) <= %s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.id, ar.project_id, p.name AS project_name,
                    ar.worker_name, ar.team_type, ar.specialist_team_name, ar.status,
                    ar.work_days, ar.daily_wage, ar.overtime_hours, ar.overtime_rate,
                    ar.kasbon_amount, ar.reimburse_type, ar.reimburse_amount,
                    ar.attendance_date, ar.notes, ar.created_at
                FROM attendance_records ar
                LEFT JOIN projects p ON p.id = ar.project_id
                {where}
                ORDER BY ar.created_at ASC, ar.id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        log.debug("loaded %d attendance rows (from=%s to=%s)", len(rows), start_date, end_date)
        return records_from_rows(rows)

    def list_reset_markers(self) -> Sequence[PayrollResetMarker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, project_id, team_type, specialist_team_name, worker_name, paid_until_date, created_at
                FROM payroll_resets
                ORDER BY created_at ASC, id ASC
                """
            )
            rows = fetchall(cur)

        markers = [marker_from_row(r) for r in rows]
        return [m for m in markers if m is not None]

    def add_reset_marker(self, marker: PayrollResetMarker) -> str:
        marker_id = marker.marker_id or str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_resets(id, project_id, team_type, specialist_team_name, worker_name, paid_until_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    marker_id,
                    marker.project_id,
                    marker.team_type.value,
                    marker.specialist_team_name,
                    marker.worker_name,
                    marker.paid_until_date,
                ),
            )
        log.info(
            "payroll reset %s: project=%s team=%s worker=%s paid_until=%s",
            marker_id,
            marker.project_id,
            marker.team_type.value,
            marker.worker_name or "*",
            marker.paid_until_date,
        )
        return marker_id
