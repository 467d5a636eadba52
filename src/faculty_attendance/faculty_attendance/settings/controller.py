from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .model import Settings


def register(app: Flask, container: Container) -> None:
    provider = container.settings

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    def settings_get():
        return jsonify(dict(asdict(provider.current), error=provider.error))

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    def settings_update():
        data = json_body()
        current = asdict(provider.current)
        merged = {key: data.get(key, value) for key, value in current.items()}
        new_settings = Settings.from_store(
            {
                "onTimeThreshold": merged["on_time_threshold"],
                "permissionLimit": merged["permission_limit"],
                "accountCreationEnabled": merged["account_creation_enabled"],
                "userAccountRequestEnabled": merged["user_account_request_enabled"],
            }
        )
        return jsonify(asdict(provider.update(new_settings)))
