"""Wage report export view.

Scopes a recap (fetched with paid rows included, COMBINED mode) down to the
rows a report should show, then rolls them up per worker with overtime.
Selection failures come back as ``ExportFailure`` values, never as exceptions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence, Union

from ..common.money import parse_amount
from ..common.validators import normalize_text
from ..core.enums import AttendanceStatus, ExportMode, TeamType
from ..core.exceptions import EmptySelectionError
from .model import RecapRow

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReimburseLine:
    line_date: date
    description: str
    qty: int
    unit_price: int
    total: int


@dataclass(frozen=True)
class ExportParams:
    date_from: date
    date_to: date
    export_mode: ExportMode = ExportMode.SELECTED
    selected_ids: tuple[str, ...] = ()
    specialist_team_name: Optional[str] = None
    project_name: Optional[str] = None
    report_title: Optional[str] = None
    reimburse_lines: tuple[ReimburseLine, ...] = ()


@dataclass(frozen=True)
class WorkerRollup:
    worker_name: str
    team_type: TeamType
    specialist_team_name: Optional[str]
    days_worked: int
    overtime_hours: float
    overtime_rate: int
    total_overtime_pay: int
    daily_rate: int
    total_wage: int
    total_kasbon: int
    total_paid: int
    project_names: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExportView:
    date_from: date
    date_to: date
    export_mode: ExportMode
    report_title: str
    specialist_team_name: Optional[str]
    workers: list[WorkerRollup]
    reimburse_lines: list[ReimburseLine]
    total_wage: int
    total_overtime: int
    total_kasbon: int
    total_reimburse: int
    subtotal: int
    grand_total: int

    ok = True


@dataclass(frozen=True)
class ExportFailure:
    message: str
    status: int = 400

    ok = False


ExportOutcome = Union[ExportView, ExportFailure]


def reimburse_lines_from_pairs(
    amounts: Sequence[Optional[str]],
    notes: Sequence[Optional[str]],
    *,
    line_date: date,
) -> tuple[ReimburseLine, ...]:
    """Build manual reimbursement lines from parallel amount/note inputs.

    Lines without a positive amount are dropped; a blank note becomes
    "Reimburse <n>" (1-based position in the input).
    """

    lines: list[ReimburseLine] = []
    for index in range(max(len(amounts), len(notes))):
        amount = parse_amount(amounts[index] if index < len(amounts) else None)
        if amount <= 0:
            continue
        description = ((notes[index] if index < len(notes) else None) or "").strip()
        lines.append(
            ReimburseLine(
                line_date=line_date,
                description=description or f"Reimburse {index + 1}",
                qty=1,
                unit_price=amount,
                total=amount,
            )
        )
    return tuple(lines)


def _unique(values: Sequence[str]) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        if v and v not in seen:
            seen[v] = None
    return list(seen)


def _resolve_specialist_name(selected: Sequence[RecapRow], explicit: str) -> str:
    if explicit:
        return explicit
    names = _unique([(r.record.specialist_team_name or "").strip() for r in selected if r.record.is_specialist])
    # Compare case-insensitively: "Listrik" and "listrik " are the same crew.
    if len({normalize_text(n) for n in names}) == 1:
        return names[0]
    return ""


def select_rows(rows: Sequence[RecapRow], params: ExportParams) -> tuple[list[RecapRow], str]:
    """Rows in scope for the report, plus the resolved specialist team name.

    Raises EmptySelectionError when the mode's input is missing or ambiguous.
    """

    selected_ids = set(params.selected_ids)
    selected = [r for r in rows if r.record.record_id in selected_ids]
    specialist_input = (params.specialist_team_name or "").strip()

    if params.export_mode == ExportMode.SELECTED:
        if not selected:
            raise EmptySelectionError("Belum ada data checklist terpilih. Pilih pekerja dulu lalu export.")
        return selected, specialist_input

    if params.export_mode == ExportMode.PROJECT:
        if not selected:
            raise EmptySelectionError("Checklist project wajib dipilih dulu sebelum export mode project.")
        project_ids = set(_unique([r.record.project_id.strip() for r in selected if not r.record.is_specialist]))
        if not project_ids:
            raise EmptySelectionError("Checklist project belum ada. Pilih minimal 1 data non-spesialis.")
        scoped = [r for r in rows if not r.record.is_specialist and r.record.project_id in project_ids]
        return scoped, specialist_input

    if params.export_mode == ExportMode.SPECIALIST:
        if not selected and not specialist_input:
            raise EmptySelectionError("Checklist tim spesialis atau nama tim spesialis wajib diisi.")
        team_name = _resolve_specialist_name(selected, specialist_input)
        if not team_name:
            raise EmptySelectionError(
                "Nama tim spesialis wajib diisi atau pilih checklist tim spesialis yang sama."
            )
        wanted = normalize_text(team_name)
        scoped = [r for r in rows if r.record.is_specialist and r.record.specialist_key == wanted]
        return scoped, team_name

    raise ValueError(f"Unsupported export mode: {params.export_mode!r}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _overtime_pay(row: RecapRow) -> int:
    return _round_half_up(float(row.record.overtime_hours) * int(row.record.overtime_rate))


def rollup_workers(rows: Sequence[RecapRow]) -> list[WorkerRollup]:
    grouped: dict[str, dict] = {}

    for row in rows:
        rec = row.record
        key = f"{rec.worker_key}|{rec.team_type.value}|{rec.specialist_key}"
        g = grouped.get(key)
        if not g:
            g = {
                "worker_name": rec.worker_name,
                "team_type": rec.team_type,
                "specialist_team_name": rec.specialist_team_name if rec.is_specialist else None,
                "days_worked": 0,
                "overtime_hours": 0.0,
                "total_overtime_pay": 0,
                "total_wage": 0,
                "total_kasbon": 0,
                "total_paid": 0,
                "project_names": set(),
                "notes": [],
            }
            grouped[key] = g

        wage = 0
        if rec.status == AttendanceStatus.PRESENT:
            wage = rec.daily_wage * rec.work_days
            g["days_worked"] += rec.work_days
            g["total_wage"] += wage
        g["overtime_hours"] += float(rec.overtime_hours)
        g["total_overtime_pay"] += _overtime_pay(row)
        g["total_kasbon"] += rec.kasbon_amount
        # Same wage basis as total_wage, whatever calculator annotated the row.
        g["total_paid"] += max(wage - rec.kasbon_amount + rec.reimburse_amount, 0)
        if rec.project_name and rec.project_name.strip():
            g["project_names"].add(rec.project_name.strip())
        if rec.notes and rec.notes not in g["notes"]:
            g["notes"].append(rec.notes)

    workers = [
        WorkerRollup(
            worker_name=g["worker_name"],
            team_type=g["team_type"],
            specialist_team_name=g["specialist_team_name"],
            days_worked=g["days_worked"],
            overtime_hours=round(g["overtime_hours"], 2),
            overtime_rate=_round_half_up(g["total_overtime_pay"] / g["overtime_hours"]) if g["overtime_hours"] > 0 else 0,
            total_overtime_pay=g["total_overtime_pay"],
            daily_rate=_round_half_up(g["total_wage"] / g["days_worked"]) if g["days_worked"] > 0 else 0,
            total_wage=g["total_wage"],
            total_kasbon=g["total_kasbon"],
            total_paid=g["total_paid"],
            project_names=sorted(g["project_names"], key=str.casefold),
            notes=g["notes"],
        )
        for g in grouped.values()
    ]
    workers.sort(key=lambda w: w.worker_name.casefold())
    return workers


def default_report_title(
    *,
    export_mode: ExportMode,
    specialist_team_name: str,
    scope_project_name: str,
    project_names: Sequence[str],
) -> str:
    if export_mode == ExportMode.SPECIALIST:
        project_label = scope_project_name or ", ".join(project_names) or "LINTAS PROJECT"
        return f"RINCIAN UPAH TIM {specialist_team_name.upper()} ({project_label.upper()})"
    if export_mode == ExportMode.PROJECT:
        if project_names:
            return f"RINCIAN UPAH PROJECT {', '.join(project_names).upper()}"
        return "RINCIAN UPAH PROJECT"
    if export_mode == ExportMode.SELECTED:
        if len(project_names) == 1:
            return f"RINCIAN UPAH PROJECT {project_names[0].upper()}"
        return "RINCIAN UPAH PEKERJA TERPILIH"
    raise ValueError(f"Unsupported export mode: {export_mode!r}")


def build_export_view(rows: Sequence[RecapRow], params: ExportParams) -> ExportOutcome:
    try:
        scoped, specialist_name = select_rows(rows, params)
        if not scoped:
            raise EmptySelectionError("Data absensi tidak ditemukan untuk filter export ini.", status=404)
    except EmptySelectionError as e:
        log.info("wage export rejected (mode=%s): %s", params.export_mode.value, e)
        return ExportFailure(message=str(e), status=e.status)

    project_names = sorted(
        _unique([(r.record.project_name or "").strip() for r in scoped]),
        key=str.casefold,
    )
    title = (params.report_title or "").strip() or default_report_title(
        export_mode=params.export_mode,
        specialist_team_name=specialist_name,
        scope_project_name=(params.project_name or "").strip(),
        project_names=project_names,
    )

    workers = rollup_workers(scoped)
    reimburse_lines = list(params.reimburse_lines)
    total_wage = sum(w.total_wage for w in workers)
    total_overtime = sum(w.total_overtime_pay for w in workers)
    total_kasbon = sum(w.total_kasbon for w in workers)
    total_reimburse = sum(line.total for line in reimburse_lines)
    subtotal = total_wage + total_overtime + total_reimburse

    return ExportView(
        date_from=params.date_from,
        date_to=params.date_to,
        export_mode=params.export_mode,
        report_title=title,
        specialist_team_name=specialist_name or None,
        workers=workers,
        reimburse_lines=reimburse_lines,
        total_wage=total_wage,
        total_overtime=total_overtime,
        total_kasbon=total_kasbon,
        total_reimburse=total_reimburse,
        subtotal=subtotal,
        grand_total=subtotal - total_kasbon,
    )
