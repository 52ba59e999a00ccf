from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, PayrollResetMarker


class AttendanceRepository(Protocol):
    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Snapshot of attendance rows, in storage order.

        Date bounds are a pre-filter hint only; the recap re-applies them.
        """

        raise NotImplementedError

    def list_reset_markers(self) -> Sequence[PayrollResetMarker]:
        raise NotImplementedError

    def add_reset_marker(self, marker: PayrollResetMarker) -> str:
        raise NotImplementedError
