from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import json_body, to_primitive
from ..common.validators import require_non_negative_int
from ..container import Container
from .model import PayrollSheet


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def _build(month: str, days: Optional[object], overrides: dict) -> PayrollSheet:
        calendar_days = require_non_negative_int(days, "Days") if days not in (None, "") else None
        sheet = service.build_sheet(month, calendar_days=calendar_days)
        for emp_id, payable_days in overrides.items():
            sheet = service.update_payable_days(sheet, require_non_negative_int(emp_id, "Employee ID"), payable_days)
        return sheet

    @app.route("/api/payroll/<month>", methods=["GET"], endpoint="payroll_summary")
    def payroll_summary(month: str):
        return jsonify(to_primitive(_build(month, request.args.get("days"), {})))

    @app.route("/api/payroll/<month>/recalculate", methods=["POST"], endpoint="payroll_recalculate")
    def payroll_recalculate(month: str):
        data = json_body()
        return jsonify(to_primitive(_build(month, data.get("days"), data.get("overrides") or {})))

    @app.route("/api/payroll/<month>/finalize", methods=["POST"], endpoint="payroll_finalize")
    def payroll_finalize(month: str):
        data = json_body()
        sheet = _build(month, data.get("days"), data.get("overrides") or {})
        deducted = service.finalize(sheet)
        message = f"CL deductions applied to {deducted} faculty members." if deducted else "No CL deductions needed."
        return jsonify({"deducted": deducted, "message": message})
