from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .allocation.controller import register as register_allocation
from .attendance.controller import register as register_attendance
from .container import build_container, build_store
from .core.exceptions import (
    AlreadyCompletedError,
    DomainError,
    InvalidRangeError,
    NotFoundError,
    PartialWriteError,
    StoreError,
    ValidationError,
    WriteConflictError,
)
from .database.bootstrap import apply_schema, list_tables
from .faculty.controller import register as register_faculty
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .settings.controller import register as register_settings
from .store.port import RecordStore

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their bases.
_ERROR_STATUS = (
    (NotFoundError, 404),
    (InvalidRangeError, 400),
    (ValidationError, 400),
    (AlreadyCompletedError, 409),
    (WriteConflictError, 409),
    (PartialWriteError, 500),
    (StoreError, 503),
)


def create_app(*, store: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if store is None:
        backend = getattr(settings, "STORE_BACKEND", "memory")
        db_config = getattr(settings, "DB_CONFIG", None)
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        store = build_store(backend=backend, db_config=db_config)
        logger.info("settings=%s store=%s", settings_module, backend)

    container = build_container(store=store)
    app.extensions["faculty_attendance"] = container

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = next((code for cls, code in _ERROR_STATUS if isinstance(exc, cls)), 400)
        if status >= 500:
            logger.error("request failed: %s", exc.message, exc_info=exc)
        return jsonify({"error": exc.message}), status

    register_faculty(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_holidays(app, container)
    register_payroll(app, container)
    register_allocation(app, container)
    register_settings(app, container)

    return app
