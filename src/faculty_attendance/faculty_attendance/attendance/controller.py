from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, require_field, to_primitive
from ..common.validators import require_non_negative_int
from ..container import Container
from .aggregator import status_counts


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str) -> date:
        raw = request.args.get(name)
        return parse_iso_date(raw) if raw else date.today()

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        entries = container.attendance_service.entries(
            start=_date_arg("start"),
            end=_date_arg("end"),
            dept=request.args.get("dept", "all"),
            name=request.args.get("name", ""),
        )
        return jsonify(
            {
                "entries": [dict(to_primitive(e), id=e.id) for e in entries],
                "stats": to_primitive(status_counts(entries)),
            }
        )

    @app.route("/api/attendance/import", methods=["POST"], endpoint="attendance_import")
    def attendance_import():
        data = json_body()
        result = container.attendance_service.import_rows(
            data.get("rows") or [],
            parse_iso_date(require_field(data, "date")),
        )
        return jsonify(
            {
                "uploaded": result.uploaded,
                "skipped_ids": to_primitive(result.skipped_ids),
                "message": result.message,
            }
        )

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    def attendance_manual():
        data = json_body()
        record = container.attendance_service.mark_manual(
            require_non_negative_int(require_field(data, "emp_id"), "Employee ID"),
            parse_iso_date(require_field(data, "date")),
            require_field(data, "mark_as"),
        )
        return jsonify(to_primitive(record))

    @app.route("/api/attendance/roster", methods=["GET"], endpoint="attendance_roster")
    def attendance_roster():
        return jsonify(to_primitive(container.attendance_service.daily_roster(_date_arg("date"))))

    @app.route("/api/faculty/<int:emp_id>/month-stats", methods=["GET"], endpoint="attendance_month_stats")
    def attendance_month_stats(emp_id: int):
        month = request.args.get("month") or date.today().strftime("%Y-%m")
        return jsonify(to_primitive(container.attendance_service.month_stats(emp_id, month)))
