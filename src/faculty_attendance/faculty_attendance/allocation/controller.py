from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import to_primitive
from ..container import Container


def register(app: Flask, container: Container) -> None:
    allocator = container.allocator

    @app.route("/api/allocations/<month>", methods=["GET"], endpoint="allocation_status")
    def allocation_status(month: str):
        return jsonify({"month": month, "completed": allocator.is_completed(month)})

    @app.route("/api/allocations/<month>", methods=["POST"], endpoint="allocation_run")
    def allocation_run(month: str):
        result = allocator.allocate(month)
        return jsonify(dict(to_primitive(result), message=result.message)), 201
