from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.settings import AttendanceSettings
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .logging_utils import setup_json_logging
from .regularization.controller import register as register_regularization
from .requests.controller import register as register_requests
from .shifts.controller import register as register_shifts

logger = logging.getLogger("shift_attendance.app")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run against ready-made services (tests); otherwise
    MySQL-backed repositories are built from the active settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_json_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("schema_ready", extra={"tables": len(list_tables(conn))})
        container = build_container(db_config=db_config, settings=AttendanceSettings.from_settings(settings))

    logger.info("app_created", extra={"settings": settings_module})

    register_shifts(app, container)
    register_attendance(app, container)
    register_regularization(app, container)
    register_requests(app, container)

    return app
