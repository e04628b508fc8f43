from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .overtime.controller import register as register_overtime
from .overtime.repository import RecordStore

logger = logging.getLogger(__name__)


def create_app(*, settings_module: Optional[str] = None, records_repo: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    # Remember the last technician across browser sessions
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=365)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if records_repo is None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        records_repo=records_repo,
        technicians=getattr(settings, "TECHNICIANS"),
        enforce_roster=bool(getattr(settings, "ENFORCE_ROSTER", True)),
        require_description=bool(getattr(settings, "REQUIRE_DESCRIPTION", False)),
        bulk_delete_code=str(getattr(settings, "BULK_DELETE_CODE")),
        display_timezone=str(getattr(settings, "DISPLAY_TIMEZONE")),
    )
    app.extensions["overtime_container"] = container

    register_overtime(app, container)

    return app
