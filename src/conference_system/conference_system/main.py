from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .admissions.controller import register as register_admissions
from .catalog.controller import register as register_catalog
from .container import Container, build_container
from .core.exceptions import DependencyFailureError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .participants.controller import register as register_participants
from .proceedings.controller import register as register_proceedings
from .registrations.controller import register as register_registrations

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    secret_key = getattr(settings, "SECRET_KEY", "")
    if not secret_key:
        raise RuntimeError(f"SECRET_KEY must be set for {settings_module}")
    app.secret_key = secret_key
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 16 * 1024 * 1024))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            mail_config=getattr(settings, "MAIL_CONFIG", None),
            upload_folder=getattr(settings, "UPLOAD_FOLDER", "uploads"),
        )
        atexit.register(container.notifier.shutdown, wait=False)

    app.extensions["conference"] = container

    register_participants(app, container)
    register_catalog(app, container)
    register_registrations(app, container)
    register_admissions(app, container)
    register_proceedings(app, container)

    @app.route("/test-db", methods=["GET"], endpoint="test_db")
    def test_db():
        try:
            return jsonify({"success": True, "result": container.ping()}), 200
        except DependencyFailureError:
            return jsonify({"success": False, "error": "Database connection failed"}), 503

    return app
