from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..attendance.model import PayrollResetMarker
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_start, parse_iso_date, today_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_FEED_LIMIT, FEED_DATE_FROM, FEED_DATE_TO
from ..core.enums import RecapMode, TeamType
from ..core.exceptions import ValidationError
from .calculator.base import NetPayCalculator
from .calculator.standard_calculator import StandardNetPayCalculator
from .export import ExportOutcome, ExportParams, build_export_view
from .model import RecapFilters, RecapResult, RecapRow
from .recap import compute_recap

log = logging.getLogger(__name__)


def default_window(today: Optional[date] = None) -> tuple[date, date]:
    """First day of the current month through today."""
    today = today or today_local()
    return month_start(today), today


class PayrollService:
    """Fetches a fresh record/marker snapshot per call and runs the recap engine."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[NetPayCalculator] = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardNetPayCalculator()

    def recap(self, filters: RecapFilters) -> RecapResult:
        if filters.date_from > filters.date_to:
            raise ValidationError("Tanggal mulai tidak boleh setelah tanggal akhir")

        records = self._attendance.list_records(start_date=filters.date_from, end_date=filters.date_to)
        markers = self._attendance.list_reset_markers()
        result = compute_recap(records, markers, filters, calculator=self._calculator)

        log.info(
            "recap %s..%s mode=%s rows=%d net_pay=%d",
            filters.date_from,
            filters.date_to,
            filters.recap_mode.value,
            len(result.rows),
            result.total_net_pay,
        )
        return result

    def feed(self, *, limit: int = DEFAULT_FEED_LIMIT) -> list[RecapRow]:
        """Latest unpaid rows across all dates."""

        filters = RecapFilters(
            date_from=parse_iso_date(FEED_DATE_FROM),
            date_to=parse_iso_date(FEED_DATE_TO),
            limit=limit,
        )
        return self.recap(filters).rows

    def export(self, params: ExportParams) -> ExportOutcome:
        filters = RecapFilters(
            date_from=params.date_from,
            date_to=params.date_to,
            include_already_paid=True,
            recap_mode=RecapMode.COMBINED,
        )
        return build_export_view(self.recap(filters).rows, params)

    def confirm_paid(
        self,
        *,
        project_id: str,
        team_type: TeamType,
        paid_until_date: Optional[date] = None,
        specialist_team_name: Optional[str] = None,
        worker_name: Optional[str] = None,
    ) -> PayrollResetMarker:
        """Record that a team (or one worker of it) is paid through ``paid_until_date``.

        Without a worker name the whole team scope is settled.
        """

        project_id = require_non_empty(project_id, "Project")
        marker = PayrollResetMarker(
            project_id=project_id,
            team_type=team_type,
            paid_until_date=paid_until_date or today_local(),
            specialist_team_name=optional_text(specialist_team_name) if team_type == TeamType.SPECIALIST else None,
            worker_name=optional_text(worker_name),
        )
        marker_id = self._attendance.add_reset_marker(marker)
        return replace(marker, marker_id=marker_id)
