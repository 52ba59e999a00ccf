from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.enums import RecapMode
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll

log = logging.getLogger(__name__)


def parse_recap_mode(value: str) -> RecapMode:
    try:
        return RecapMode(str(value or "").strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown DEFAULT_RECAP_MODE {value!r}; expected one of {sorted(m.value for m in RecapMode)}"
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["DEFAULT_RECAP_MODE"] = parse_recap_mode(getattr(settings, "DEFAULT_RECAP_MODE", "per_project")).value
    app.config["FEED_LIMIT"] = int(getattr(settings, "FEED_LIMIT", 20))

    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    container = build_container(
        db_config=db_config,
        wage_calculator=getattr(settings, "WAGE_CALCULATOR", "standard"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)

    register_payroll(app, container)

    return app
