from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, require_field, to_primitive
from ..container import Container
from .model import FacultyRecord


def _record_from(emp_id, data: dict) -> FacultyRecord:
    return FacultyRecord(
        emp_id=emp_id,
        name=data.get("name", ""),
        dept=data.get("dept", ""),
        designation=data.get("designation", ""),
        salary=data.get("salary", 0),
        casual_leaves=data.get("casual_leaves", 0),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/faculty", methods=["GET"], endpoint="faculty_list")
    def faculty_list():
        return jsonify(to_primitive(container.faculty_service.list_faculty()))

    @app.route("/api/faculty", methods=["POST"], endpoint="faculty_add")
    def faculty_add():
        data = json_body()
        record = container.faculty_service.add(_record_from(require_field(data, "emp_id"), data))
        return jsonify(to_primitive(record)), 201

    @app.route("/api/faculty/<int:emp_id>", methods=["PUT"], endpoint="faculty_update")
    def faculty_update(emp_id: int):
        record = container.faculty_service.update(_record_from(emp_id, json_body()))
        return jsonify(to_primitive(record))

    @app.route("/api/faculty/<int:emp_id>", methods=["DELETE"], endpoint="faculty_delete")
    def faculty_delete(emp_id: int):
        container.faculty_service.delete(emp_id)
        return "", 204

    @app.route("/api/faculty/import", methods=["POST"], endpoint="faculty_import")
    def faculty_import():
        count = container.faculty_service.import_rows(json_body().get("rows") or [])
        return jsonify({"imported": count})
