"""Payroll cutoff: drop rows already settled by a payroll reset marker.

A record's effective cutoff is the latest ``paid_until_date`` among every
marker whose scope matches it, team-wide and worker-specific alike. The record
is unpaid iff there is no cutoff or its date is strictly after it.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, PayrollResetMarker


def effective_cutoff(record: AttendanceRecord, markers: Iterable[PayrollResetMarker]) -> Optional[date]:
    latest: Optional[date] = None
    for marker in markers:
        if not marker.matches(record):
            continue
        if latest is None or marker.paid_until_date > latest:
            latest = marker.paid_until_date
    return latest


def is_paid(record: AttendanceRecord, markers: Iterable[PayrollResetMarker]) -> bool:
    cutoff = effective_cutoff(record, markers)
    return cutoff is not None and record.attendance_date <= cutoff


def apply_cutoff(
    records: Sequence[AttendanceRecord],
    markers: Sequence[PayrollResetMarker],
) -> list[AttendanceRecord]:
    """Records not yet paid, in input order."""

    if not markers:
        return list(records)
    return [r for r in records if not is_paid(r, markers)]
