from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, require_field, to_primitive
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        month = request.args.get("month")
        holidays = service.in_month(month) if month else service.list_holidays()
        return jsonify(to_primitive(holidays))

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_add")
    def holidays_add():
        data = json_body()
        holiday = service.add(parse_iso_date(require_field(data, "date")), data.get("description", ""))
        return jsonify(to_primitive(holiday)), 201

    @app.route("/api/holidays/<holiday_id>", methods=["PUT"], endpoint="holidays_update")
    def holidays_update(holiday_id: str):
        holiday = service.update_description(holiday_id, json_body().get("description", ""))
        return jsonify(to_primitive(holiday))

    @app.route("/api/holidays/<holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    def holidays_delete(holiday_id: str):
        service.delete(holiday_id)
        return "", 204
