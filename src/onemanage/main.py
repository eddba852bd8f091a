from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_mail import Mail

from .config import get_settings_module
from .container import Container, build_container
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, list_tables
from .database.connection import MongoConfig, MongoConnection
from .database.mongo_base import ensure_indexes
from .dashboard.controller import register as register_dashboard
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .notifications.controller import register as register_notifications
from .notifications.mailer import FlaskMailer
from .tasks.controller import register as register_tasks
from .tenants.controller import register as register_tenants

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def _init_store(settings, backend: StoreBackend) -> None:
    if backend is StoreBackend.MYSQL:
        db_config = getattr(settings, "DB_CONFIG")
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("mysql schema ready (tables=%d)", len(list_tables(db_config)))
        return
    mongo_config = getattr(settings, "MONGO_CONFIG")
    ensure_indexes(MongoConnection.get_instance(MongoConfig(uri=mongo_config["uri"], database=mongo_config["database"])))


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mail_config = getattr(settings, "MAIL_CONFIG")
    app.config.update(
        MAIL_SERVER=mail_config["host"],
        MAIL_PORT=int(mail_config["port"]),
        MAIL_USE_TLS=bool(mail_config["use_tls"]),
        MAIL_USERNAME=mail_config["user"] or None,
        MAIL_PASSWORD=mail_config["password"] or None,
        MAIL_DEFAULT_SENDER=mail_config["user"] or None,
        MAIL_SUPPRESS_SEND=app.config["TESTING"],
    )
    mail = Mail(app)

    if container is None:
        backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", "mongo")).lower())
        logger.info("settings=%s backend=%s", settings_module, backend.value)
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            _init_store(settings, backend)
        container = build_container(settings, mailer=FlaskMailer(mail, mail_config["user"] or None))

    app.extensions["onemanage"] = container

    register_tenants(app, container)
    register_departments(app, container)
    register_employees(app, container)
    register_tasks(app, container)
    register_notifications(app, container)
    register_dashboard(app, container)

    return app
