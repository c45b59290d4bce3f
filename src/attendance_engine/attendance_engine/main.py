from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .container import build_container

logger = logging.getLogger(__name__)


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    store_backend = getattr(settings, "STORE_BACKEND", "http")
    if app.config["DEBUG"]:
        logger.info(
            "settings=%s store=%s api=%s",
            settings_module,
            store_backend,
            getattr(settings, "API_BASE_URL", None),
        )

    container = build_container(
        store_backend=store_backend,
        api_base_url=getattr(settings, "API_BASE_URL", None),
        api_timeout=float(getattr(settings, "API_TIMEOUT", 10)),
        db_config=getattr(settings, "DB_CONFIG", None),
        weeks_back=int(getattr(settings, "MAX_WEEKS_BACK", 11)),
    )
    app.extensions["attendance_container"] = container

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "store": container.store_backend})

    register_attendance(app, container)

    return app
