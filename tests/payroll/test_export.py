from datetime import date

import pytest

from wage_recap.core.enums import AttendanceStatus, ExportMode, TeamType
from wage_recap.core.exceptions import EmptySelectionError
from wage_recap.payroll.calculator.standard_calculator import StandardNetPayCalculator
from wage_recap.payroll.export import (
    ExportParams,
    ReimburseLine,
    build_export_view,
    reimburse_lines_from_pairs,
    rollup_workers,
    select_rows,
)
from wage_recap.payroll.recap import annotate


def _rows(records):
    return annotate(records, [], StandardNetPayCalculator())


def _params(mode, selected_ids=(), **kwargs):
    return ExportParams(
        date_from=date(2026, 2, 1),
        date_to=date(2026, 2, 28),
        export_mode=mode,
        selected_ids=tuple(selected_ids),
        **kwargs,
    )


@pytest.fixture
def site(make_record):
    return [
        make_record("Dedi", record_id="a1"),
        make_record("Joko", record_id="a2", team_type=TeamType.HELPER, daily_wage=100000),
        make_record("Budi", record_id="a3", attendance_date=date(2026, 2, 6)),
        make_record("Yanto", record_id="s1", team_type=TeamType.SPECIALIST, specialist_team_name="Listrik"),
        make_record("Andi", record_id="s2", team_type=TeamType.SPECIALIST, specialist_team_name="Baja"),
        make_record("Sari", record_id="b1", project_id="P2", project_name="Gudang"),
    ]


def test_project_mode_expands_selection_to_whole_project(site):
    scoped, _ = select_rows(_rows(site), _params(ExportMode.PROJECT, ["a1"]))

    assert sorted(r.record.record_id for r in scoped) == ["a1", "a2", "a3"]


def test_project_mode_requires_a_non_specialist_pick(site):
    with pytest.raises(EmptySelectionError) as exc:
        select_rows(_rows(site), _params(ExportMode.PROJECT, ["s1"]))

    assert "non-spesialis" in str(exc.value)


def test_selected_mode_without_selection_fails(site):
    outcome = build_export_view(_rows(site), _params(ExportMode.SELECTED))

    assert outcome.ok is False
    assert outcome.status == 400
    assert outcome.message.startswith("Belum ada data checklist terpilih")


def test_specialist_mode_rejects_ambiguous_team_names(site):
    outcome = build_export_view(_rows(site), _params(ExportMode.SPECIALIST, ["s1", "s2"]))

    assert outcome.ok is False
    assert "tim spesialis yang sama" in outcome.message


def test_specialist_mode_with_explicit_name_ignores_selection(site):
    outcome = build_export_view(
        _rows(site), _params(ExportMode.SPECIALIST, ["s1", "s2"], specialist_team_name="baja")
    )

    assert outcome.ok is True
    assert [w.worker_name for w in outcome.workers] == ["Andi"]
    assert outcome.report_title == "RINCIAN UPAH TIM BAJA (RUMAH CIPETE)"


def test_specialist_mode_resolves_single_team_from_selection(site):
    outcome = build_export_view(_rows(site), _params(ExportMode.SPECIALIST, ["s1"]))

    assert outcome.ok is True
    assert outcome.specialist_team_name == "Listrik"
    assert [w.worker_name for w in outcome.workers] == ["Yanto"]


def test_specialist_mode_without_match_is_not_found(site):
    outcome = build_export_view(_rows(site), _params(ExportMode.SPECIALIST, specialist_team_name="Kayu"))

    assert outcome.ok is False
    assert outcome.status == 404


def test_rollup_wages_overtime_and_rates(make_record):
    rows = _rows(
        [
            make_record("Dedi", daily_wage=150000, overtime_hours=2, overtime_rate=20000, kasbon_amount=50000),
            make_record("Dedi", daily_wage=160000, work_days=2, overtime_hours=1.5, overtime_rate=25000),
            make_record(
                "Dedi",
                status=AttendanceStatus.ABSENT,
                daily_wage=0,
                overtime_hours=1,
                overtime_rate=10000,
                notes="izin sore",
            ),
        ]
    )

    [dedi] = rollup_workers(rows)

    assert dedi.days_worked == 3
    assert dedi.total_wage == 150000 + 320000
    assert dedi.daily_rate == 156667
    assert dedi.overtime_hours == 4.5
    assert dedi.total_overtime_pay == 40000 + 37500 + 10000
    assert dedi.overtime_rate == 19444
    assert dedi.total_kasbon == 50000
    assert dedi.notes == ["izin sore"]


def test_rollup_zero_days_means_zero_rates(make_record):
    [w] = rollup_workers(_rows([make_record(status=AttendanceStatus.SICK, daily_wage=0)]))

    assert w.days_worked == 0
    assert w.daily_rate == 0
    assert w.overtime_rate == 0


def test_report_totals(make_record):
    records = [
        make_record("Dedi", record_id="x1", daily_wage=150000, overtime_hours=2, overtime_rate=20000),
        make_record("Joko", record_id="x2", daily_wage=120000, kasbon_amount=70000),
    ]
    lines = (ReimburseLine(date(2026, 2, 28), "Semen", 1, 65000, 65000),)

    view = build_export_view(_rows(records), _params(ExportMode.SELECTED, ["x1", "x2"], reimburse_lines=lines))

    assert view.total_wage == 270000
    assert view.total_overtime == 40000
    assert view.total_kasbon == 70000
    assert view.total_reimburse == 65000
    assert view.subtotal == 375000
    assert view.grand_total == 305000
    assert [w.worker_name for w in view.workers] == ["Dedi", "Joko"]
    assert view.report_title == "RINCIAN UPAH PROJECT RUMAH CIPETE"


def test_custom_title_wins(site):
    view = build_export_view(_rows(site), _params(ExportMode.SELECTED, ["a1", "b1"], report_title="  Upah Minggu 2 "))

    assert view.report_title == "Upah Minggu 2"


def test_selected_across_projects_gets_generic_title(site):
    view = build_export_view(_rows(site), _params(ExportMode.SELECTED, ["a1", "b1"]))

    assert view.report_title == "RINCIAN UPAH PEKERJA TERPILIH"


def test_reimburse_lines_from_pairs():
    lines = reimburse_lines_from_pairs(
        ["Rp 50.000", "", "12.500,75", "-3000"],
        ["Pasir", "Kosong", "  "],
        line_date=date(2026, 2, 28),
    )

    assert [(line.description, line.total) for line in lines] == [("Pasir", 50000), ("Reimburse 3", 12501)]
    assert all(line.qty == 1 and line.unit_price == line.total for line in lines)


def test_total_paid_uses_same_wage_basis_as_total_wage(make_record):
    rec = make_record(
        "Dedi", record_id="w1", daily_wage=100000, work_days=3, kasbon_amount=40000, reimburse_amount=15000
    )

    view = build_export_view(_rows([rec]), _params(ExportMode.SELECTED, ["w1"]))

    [dedi] = view.workers
    assert dedi.total_wage == 300000
    assert dedi.total_paid == dedi.total_wage - dedi.total_kasbon + 15000
    assert view.grand_total == 300000 - 40000


def test_overtime_hours_sum_is_rounded(make_record):
    rows = _rows(
        [
            make_record("Dedi", overtime_hours=0.1, overtime_rate=10000),
            make_record("Dedi", overtime_hours=0.2, overtime_rate=10000),
        ]
    )

    [dedi] = rollup_workers(rows)

    assert dedi.overtime_hours == 0.3
    assert dedi.total_overtime_pay == 3000
