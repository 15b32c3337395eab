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
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .feedback.controller import register as register_feedback
from .logins.controller import register as register_logins
from .scheduling.config import schedule_config_from_settings
from .students.controller import register as register_students
from .submissions.controller import register as register_submissions
from .weeks.controller import register as register_weeks

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _init_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt ``container`` to run against other repositories (tests use
    in-memory ones); otherwise MySQL repositories are wired from settings.
    """

    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Using settings %s", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        _init_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            schedule=schedule_config_from_settings(settings),
            allowed_email_domain=getattr(settings, "ALLOWED_EMAIL_DOMAIN", None),
            total_teams=int(getattr(settings, "COURSE_TOTAL_TEAMS", 8)),
        )

    app.extensions["cohort_tracker"] = container

    register_students(app, container)
    register_attendance(app, container)
    register_submissions(app, container)
    register_feedback(app, container)
    register_logins(app, container)
    register_weeks(app, container)

    return app
