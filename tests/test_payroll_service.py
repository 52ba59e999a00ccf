from __future__ import annotations

from datetime import date

import pytest

from wage_recap.core.enums import ExportMode, RecapMode, TeamType
from wage_recap.core.exceptions import ValidationError
from wage_recap.payroll import service as payroll_service_module
from wage_recap.payroll.calculator.work_block_calculator import WorkBlockNetPayCalculator
from wage_recap.payroll.export import ExportParams
from wage_recap.payroll.model import RecapFilters
from wage_recap.payroll.service import PayrollService, default_window


def test_default_window_is_month_to_date(fixed_today):
    assert default_window(fixed_today) == (date(2026, 2, 1), fixed_today)


def test_recap_rejects_inverted_range(memory_attendance):
    svc = PayrollService(memory_attendance())

    with pytest.raises(ValidationError):
        svc.recap(RecapFilters(date_from=date(2026, 2, 10), date_to=date(2026, 2, 1)))


def test_recap_reads_fresh_snapshot_each_call(memory_attendance, make_record):
    repo = memory_attendance([make_record("Dedi")])
    svc = PayrollService(repo)
    filters = RecapFilters(date_from=date(2026, 2, 1), date_to=date(2026, 2, 28))

    first = svc.recap(filters)
    repo.records.append(make_record("Joko"))
    second = svc.recap(filters)

    assert len(first.rows) == 1
    assert len(second.rows) == 2
    assert repo.list_calls[0] == {"start_date": date(2026, 2, 1), "end_date": date(2026, 2, 28)}


def test_confirm_paid_hides_settled_rows(memory_attendance, make_record):
    repo = memory_attendance([make_record("Dedi"), make_record("Joko")])
    svc = PayrollService(repo)
    filters = RecapFilters(date_from=date(2026, 2, 1), date_to=date(2026, 2, 28))

    marker = svc.confirm_paid(
        project_id=" P1 ",
        team_type=TeamType.REGULAR,
        paid_until_date=date(2026, 2, 5),
        worker_name="Dedi",
    )

    assert marker.marker_id == "reset-1"
    assert marker.project_id == "P1"
    assert [r.record.worker_name for r in svc.recap(filters).rows] == ["Joko"]


def test_confirm_paid_defaults_to_today_and_drops_team_name_outside_specialists(
    memory_attendance, monkeypatch, fixed_today
):
    monkeypatch.setattr(payroll_service_module, "today_local", lambda: fixed_today)
    svc = PayrollService(memory_attendance())

    marker = svc.confirm_paid(project_id="P1", team_type=TeamType.HELPER, specialist_team_name="Listrik", worker_name=" ")

    assert marker.paid_until_date == fixed_today
    assert marker.specialist_team_name is None
    assert marker.worker_name is None


def test_confirm_paid_requires_project(memory_attendance):
    svc = PayrollService(memory_attendance())

    with pytest.raises(ValidationError):
        svc.confirm_paid(project_id="  ", team_type=TeamType.REGULAR)


def test_feed_returns_latest_unpaid_rows(memory_attendance, make_record, make_marker):
    repo = memory_attendance(
        [
            make_record("Lama", attendance_date=date(2025, 12, 30)),
            make_record("Dedi", attendance_date=date(2026, 2, 3)),
            make_record("Joko", attendance_date=date(2026, 2, 9)),
            make_record("Sari", attendance_date=date(2026, 2, 7)),
        ],
        [make_marker(date(2026, 2, 3))],
    )

    rows = PayrollService(repo).feed(limit=2)

    assert [r.record.worker_name for r in rows] == ["Joko", "Sari"]


def test_export_includes_paid_rows(memory_attendance, make_record, make_marker):
    repo = memory_attendance(
        [make_record("Dedi", record_id="a1", daily_wage=100000, work_days=2)],
        [make_marker(date(2026, 2, 28))],
    )
    svc = PayrollService(repo, calculator=WorkBlockNetPayCalculator())

    outcome = svc.export(
        ExportParams(
            date_from=date(2026, 2, 1),
            date_to=date(2026, 2, 28),
            export_mode=ExportMode.SELECTED,
            selected_ids=("a1",),
        )
    )

    assert outcome.ok is True
    assert outcome.workers[0].total_wage == 200000
    assert outcome.workers[0].total_paid == 200000


def test_recap_mode_is_passed_through(memory_attendance, make_record):
    repo = memory_attendance([make_record("Rian", project_id="P1"), make_record("Rian", project_id="P2")])

    result = PayrollService(repo).recap(
        RecapFilters(date_from=date(2026, 2, 1), date_to=date(2026, 2, 28), recap_mode=RecapMode.COMBINED)
    )

    assert result.recap_mode == RecapMode.COMBINED
    assert len(result.worker_summaries) == 1
