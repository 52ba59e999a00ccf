from __future__ import annotations

from .base import NetPayCalculator
from ...attendance.model import AttendanceRecord
from ...core.enums import AttendanceStatus


class WorkBlockNetPayCalculator(NetPayCalculator):
    """Entry covers a block of ``work_days``; only PRESENT entries earn a wage."""

    def wage(self, record: AttendanceRecord) -> int:
        if record.status != AttendanceStatus.PRESENT:
            return 0
        return int(record.daily_wage) * int(record.work_days)
