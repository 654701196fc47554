from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .qr.controller import register as register_qr
from .reports.controller import register as register_reports
from .settings import load_settings
from .system_config.controller import register as register_system_config
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if container is None:
        settings_module = settings_module or get_settings_module()
        settings = load_settings(importlib.import_module(settings_module))
    else:
        settings = container.settings

    configure_logging(__package__, level=settings.log_level, log_file=settings.log_file)

    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing

    if container is None:
        if settings.storage_backend == "mysql" and settings.auto_init_db:
            apply_schema(settings.db_config)
            db = settings.db_config
            logger.info(
                "Schema ready on %s@%s:%s/%s (tables=%d)",
                db.get("user"), db.get("host"), db.get("port", 3306), db.get("database"),
                len(list_tables(db)),
            )
        container = build_container(settings)

    if settings.auto_seed_db:
        ensure_demo_users(container.repos.users)

    register_users(app, container)
    register_qr(app, container)
    register_attendance(app, container)
    register_system_config(app, container)
    register_reports(app, container)

    return app
