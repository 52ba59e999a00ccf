from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, PayrollResetMarker
from ..common.validators import normalize_text
from .aggregator import summarize_by_project, summarize_by_project_team, summarize_by_team, summarize_by_worker
from .calculator.base import NetPayCalculator
from .calculator.standard_calculator import StandardNetPayCalculator
from .cutoff import apply_cutoff, is_paid
from .model import RecapFilters, RecapResult, RecapRow

log = logging.getLogger(__name__)


def _matches_dimensions(record: AttendanceRecord, filters: RecapFilters, worker_keys: frozenset[str]) -> bool:
    if filters.project_id and record.project_id != filters.project_id:
        return False
    if filters.team_type is not None and record.team_type != filters.team_type:
        return False
    specialist_query = normalize_text(filters.specialist_team_name)
    if specialist_query and specialist_query not in (record.specialist_team_name or "").lower():
        return False
    if worker_keys and record.worker_key not in worker_keys:
        return False
    return True


def select_records(
    records: Sequence[AttendanceRecord],
    markers: Sequence[PayrollResetMarker],
    filters: RecapFilters,
) -> list[AttendanceRecord]:
    """Date range, then dimension filters, then payroll cutoff; newest date first.

    The date sort is stable, so same-day rows keep the snapshot order.
    """

    worker_keys = frozenset(k for k in (normalize_text(n) for n in filters.worker_names) if k)

    in_range = [r for r in records if filters.date_from <= r.attendance_date <= filters.date_to]
    selected = [r for r in in_range if _matches_dimensions(r, filters, worker_keys)]
    if not filters.include_already_paid:
        selected = apply_cutoff(selected, markers)

    log.debug(
        "recap selection: %d records, %d in range, %d after filters (include_paid=%s)",
        len(records),
        len(in_range),
        len(selected),
        filters.include_already_paid,
    )
    return sorted(selected, key=lambda r: r.attendance_date, reverse=True)


def annotate(
    records: Sequence[AttendanceRecord],
    markers: Sequence[PayrollResetMarker],
    calculator: NetPayCalculator,
) -> list[RecapRow]:
    return [
        RecapRow(
            record=r,
            wage=calculator.wage(r),
            net_pay=calculator.net_pay(r),
            payroll_paid=is_paid(r, markers),
        )
        for r in records
    ]


def compute_recap(
    records: Sequence[AttendanceRecord],
    markers: Sequence[PayrollResetMarker],
    filters: RecapFilters,
    *,
    calculator: Optional[NetPayCalculator] = None,
) -> RecapResult:
    """Aggregate a record/marker snapshot into one recap bundle.

    Summaries and grand totals cover the whole filtered set; ``filters.limit``
    only caps the returned ``rows``. Read-only: never raises for an empty result.
    """

    calculator = calculator or StandardNetPayCalculator()
    rows = annotate(select_records(records, markers, filters), markers, calculator)

    limited = rows if filters.limit is None else rows[: max(int(filters.limit), 0)]

    return RecapResult(
        date_from=filters.date_from,
        date_to=filters.date_to,
        recap_mode=filters.recap_mode,
        rows=limited,
        project_summaries=summarize_by_project(rows),
        team_summaries=summarize_by_team(rows),
        project_team_summaries=summarize_by_project_team(rows),
        worker_summaries=summarize_by_worker(rows, filters.recap_mode),
        total_daily_wage=sum(r.wage for r in rows),
        total_kasbon=sum(r.record.kasbon_amount for r in rows),
        total_reimburse=sum(r.record.reimburse_amount for r in rows),
        total_net_pay=sum(r.net_pay for r in rows),
    )
