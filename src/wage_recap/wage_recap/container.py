from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.base import NetPayCalculator
from .payroll.calculator.standard_calculator import StandardNetPayCalculator
from .payroll.calculator.work_block_calculator import WorkBlockNetPayCalculator
from .payroll.service import PayrollService

CALCULATORS: dict[str, type[NetPayCalculator]] = {
    "standard": StandardNetPayCalculator,
    "work_block": WorkBlockNetPayCalculator,
}


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository

    payroll_service: PayrollService


def build_calculator(name: str) -> NetPayCalculator:
    try:
        return CALCULATORS[(name or "standard").strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown WAGE_CALCULATOR {name!r}; expected one of {sorted(CALCULATORS)}")


def build_container(*, db_config: dict, wage_calculator: str = "standard") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    payroll_service = PayrollService(attendance_repo, calculator=build_calculator(wage_calculator))

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        payroll_service=payroll_service,
    )
