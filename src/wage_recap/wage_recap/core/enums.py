from __future__ import annotations

from enum import Enum


class TeamType(str, Enum):
    """Kelompok pekerja: tukang, laden, atau tim spesialis."""

    REGULAR = "regular_labor"
    HELPER = "helper_labor"
    SPECIALIST = "specialist"


class AttendanceStatus(str, Enum):
    """Status kehadiran harian."""

    PRESENT = "present"
    EXCUSED = "excused"
    SICK = "sick"
    ABSENT = "absent"


class ReimburseType(str, Enum):
    MATERIAL = "material"
    FUND_SHORTFALL = "fund_shortfall"


class RecapMode(str, Enum):
    """How worker totals are grouped in a recap.

    COMBINED pools a worker across every project in the window, PER_PROJECT keeps
    one row per (project, worker).
    """

    COMBINED = "combined"
    PER_PROJECT = "per_project"


class ExportMode(str, Enum):
    """Selection mode for the wage report export."""

    SELECTED = "selected"
    PROJECT = "project"
    SPECIALIST = "specialist"
