from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord


class NetPayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    ``wage`` is the wage basis summed into recap totals; ``net_pay`` is the
    payable amount and must never be negative.
    """

    @abstractmethod
    def wage(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def net_pay(self, record: AttendanceRecord) -> int:
        return max(self.wage(record) - int(record.kasbon_amount) + int(record.reimburse_amount), 0)
