from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .database.connection import DBConfig
from .logging_config import get_logger, log_with_context, setup_logging

logger = get_logger("http")


def create_app(*, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log_with_context(
            logger,
            "INFO",
            "Starting RFID attendance server",
            extra_data={
                "settings": settings_module,
                "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
            },
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            timeout = int(getattr(settings, "STORE_TIMEOUT_SECONDS", 5))
            count = apply_schema(DBConfig.from_dict(db_config, timeout_seconds=timeout), schema_path=schema_path)
            log_with_context(logger, "INFO", "Schema ready", extra_data={"statements": count})

        container = build_container(settings=settings)

    register_attendance(app, container)

    return app
