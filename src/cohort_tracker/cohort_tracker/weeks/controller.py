from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.auth import login_required
from ..common.responses import server_error
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/weeks", methods=["GET"], endpoint="api_weeks")
    @login_required
    def api_weeks():
        try:
            return jsonify(container.week_service.list_weeks())
        except Exception:
            logger.exception("Error fetching weeks")
            return server_error("Failed to fetch course weeks")
