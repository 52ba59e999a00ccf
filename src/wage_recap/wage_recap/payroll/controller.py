from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.serialization import to_jsonable
from ..container import Container
from ..core.constants import DEFAULT_FEED_LIMIT
from ..core.enums import ExportMode, RecapMode, TeamType
from ..core.exceptions import ValidationError
from .export import ExportParams, reimburse_lines_from_pairs
from .model import RecapFilters
from .service import default_window

log = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_enum(enum_cls, value: Optional[str], field_name: str, default=None):
    v = (value or "").strip()
    if not v:
        return default
    try:
        return enum_cls(v)
    except ValueError:
        raise ValidationError(f"{field_name} tidak valid: {v}")


def _parse_limit(value: Optional[str]) -> Optional[int]:
    v = (value or "").strip()
    if not v:
        return None
    if not v.isdigit():
        raise ValidationError("limit harus berupa angka")
    return int(v)


def _date_window(args):
    default_from, default_to = default_window()
    date_from = parse_optional_date(args.get("from")) or default_from
    date_to = parse_optional_date(args.get("to")) or default_to
    if date_from > date_to:
        raise ValidationError("Tanggal mulai tidak boleh setelah tanggal akhir")
    return date_from, date_to


def _unique_ids(values: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def register(app: Flask, container: Container) -> None:
    default_recap_mode = RecapMode(app.config.get("DEFAULT_RECAP_MODE", RecapMode.PER_PROJECT.value))

    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/payroll/recap", methods=["GET"], endpoint="payroll_recap")
    def payroll_recap():
        try:
            date_from, date_to = _date_window(request.args)
            filters = RecapFilters(
                date_from=date_from,
                date_to=date_to,
                project_id=(request.args.get("project_id") or "").strip() or None,
                team_type=_parse_enum(TeamType, request.args.get("team_type"), "team_type"),
                specialist_team_name=(request.args.get("specialist_team_name") or "").strip() or None,
                worker_names=_unique_ids(request.args.getlist("worker")),
                include_already_paid=(request.args.get("include_paid") or "").lower() in _TRUE_VALUES,
                recap_mode=_parse_enum(
                    RecapMode,
                    request.args.get("recap_mode"),
                    "recap_mode",
                    default=default_recap_mode,
                ),
                limit=_parse_limit(request.args.get("limit")),
            )
            result = container.payroll_service.recap(filters)
            return jsonify({"success": True, "data": to_jsonable(result)})
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            log.exception("payroll recap failed")
            return _fail("Terjadi kesalahan sistem saat menghitung rekap", 500)

    @app.route("/api/payroll/feed", methods=["GET"], endpoint="payroll_feed")
    def payroll_feed():
        try:
            limit = _parse_limit(request.args.get("limit"))
            if limit is None:
                limit = int(app.config.get("FEED_LIMIT", DEFAULT_FEED_LIMIT))
            rows = container.payroll_service.feed(limit=limit)
            return jsonify({"success": True, "data": to_jsonable(rows)})
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            log.exception("attendance feed failed")
            return _fail("Terjadi kesalahan sistem saat memuat absensi", 500)

    @app.route("/api/payroll/confirm", methods=["POST"], endpoint="payroll_confirm")
    def payroll_confirm():
        data = request.get_json(silent=True) or request.form
        try:
            marker = container.payroll_service.confirm_paid(
                project_id=str(data.get("project_id") or ""),
                team_type=_parse_enum(TeamType, data.get("team_type"), "team_type", default=TeamType.REGULAR),
                paid_until_date=parse_optional_date(data.get("paid_until_date")),
                specialist_team_name=data.get("specialist_team_name"),
                worker_name=data.get("worker_name"),
            )
            return jsonify({"success": True, "data": to_jsonable(marker)}), 201
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            log.exception("payroll confirmation failed")
            return _fail("Terjadi kesalahan sistem saat konfirmasi pembayaran", 500)

    @app.route("/api/reports/wages", methods=["GET"], endpoint="wage_report")
    def wage_report():
        try:
            date_from, date_to = _date_window(request.args)
            params = ExportParams(
                date_from=date_from,
                date_to=date_to,
                export_mode=_parse_enum(
                    ExportMode, request.args.get("export_mode"), "export_mode", default=ExportMode.SELECTED
                ),
                selected_ids=_unique_ids(request.args.getlist("selected")),
                specialist_team_name=(request.args.get("scope_specialist_team_name") or "").strip() or None,
                project_name=(request.args.get("scope_project_name") or "").strip() or None,
                report_title=(request.args.get("report_title_custom") or "").strip() or None,
                reimburse_lines=reimburse_lines_from_pairs(
                    request.args.getlist("reimburse_amount"),
                    request.args.getlist("reimburse_note"),
                    line_date=date_to,
                ),
            )
            outcome = container.payroll_service.export(params)
            if not outcome.ok:
                return _fail(outcome.message, outcome.status)
            return jsonify({"success": True, "data": to_jsonable(outcome)})
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            log.exception("wage report export failed")
            return _fail("Terjadi kesalahan sistem saat menyiapkan laporan upah", 500)
