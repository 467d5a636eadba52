from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, require_field, to_primitive
from ..common.validators import require_non_negative_int
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    workflow = container.leave_workflow

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    def leaves_list():
        return jsonify(to_primitive(workflow.refresh()))

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_submit")
    def leaves_submit():
        data = json_body()
        leave = workflow.submit(
            require_non_negative_int(require_field(data, "emp_id"), "Employee ID"),
            parse_iso_date(require_field(data, "start_date")),
            parse_iso_date(require_field(data, "end_date")),
            data.get("reason", ""),
        )
        return jsonify(to_primitive(leave)), 201

    @app.route("/api/leaves/<leave_id>/approve", methods=["POST"], endpoint="leaves_approve")
    def leaves_approve(leave_id: str):
        return jsonify(to_primitive(workflow.approve(leave_id)))

    @app.route("/api/leaves/<leave_id>/reject", methods=["POST"], endpoint="leaves_reject")
    def leaves_reject(leave_id: str):
        return jsonify(to_primitive(workflow.reject(leave_id)))

    @app.route("/api/leaves/<leave_id>", methods=["DELETE"], endpoint="leaves_delete")
    def leaves_delete(leave_id: str):
        leave = container.leaves_repo.get(leave_id)
        if leave is None:
            raise NotFoundError("Leave application not found.")
        workflow.delete_leave(leave)
        return "", 204

    @app.route("/api/faculty/<int:emp_id>/leaves", methods=["GET"], endpoint="leaves_for_faculty")
    def leaves_for_faculty(emp_id: int):
        return jsonify(to_primitive(workflow.for_employee(emp_id, request.args.get("month"))))
