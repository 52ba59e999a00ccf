from __future__ import annotations

from .base import NetPayCalculator
from ...attendance.model import AttendanceRecord


class StandardNetPayCalculator(NetPayCalculator):
    """Standard rule: daily_wage - kasbon + reimburse, not below 0.

    The wage is trusted as entered; non-present rows are expected to carry a
    zero wage already.
    """

    def wage(self, record: AttendanceRecord) -> int:
        return int(record.daily_wage)
