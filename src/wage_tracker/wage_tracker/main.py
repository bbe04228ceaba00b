from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.clock import Clock
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables
from .earnings.controller import register as register_summaries
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users
from .wages.controller import register as register_wages

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def create_app(
    *,
    settings_module: Optional[str] = None,
    container: Optional[Container] = None,
    clock: Optional[Clock] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["COOKIE_SECURE"] = bool(getattr(settings, "COOKIE_SECURE", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    backend = str(getattr(settings, "STORAGE_BACKEND", StorageBackend.MEMORY.value)).lower()
    db_config = getattr(settings, "DB_CONFIG", None)

    if container is None:
        if backend == StorageBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            backend=backend,
            db_config=db_config,
            clock=clock,
            timezone_name=getattr(settings, "TIMEZONE", None),
        )

    logger.info("Wage tracker starting: settings=%s backend=%s", settings_module, backend)

    register_error_handlers(app)
    register_users(app, container)
    register_wages(app, container)
    register_sessions(app, container)
    register_summaries(app, container)

    app.extensions["wage_tracker"] = container
    return app
