from __future__ import annotations

import logging
from datetime import datetime

import pytz
from flask import Flask, jsonify, request

from ..common.auth import admin_required
from ..common.responses import json_body, json_error, optional_arg, server_error
from ..container import Container
from ..core.constants import DEFAULT_LOGIN_HISTORY_LIMIT
from ..core.exceptions import DomainError, ValidationError
from .service import client_ip

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_datetime(name: str):
        value = optional_arg(name)
        if not value:
            return None
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid {name}: {value!r}")
        # Timestamps without an offset are UTC
        return pytz.utc.localize(parsed) if parsed.tzinfo is None else parsed

    def _parse_int(name: str, default: int) -> int:
        value = optional_arg(name)
        try:
            return int(value) if value else default
        except ValueError:
            raise ValidationError(f"Invalid {name}: {value!r}")

    @app.route("/api/auth/log-login", methods=["POST"], endpoint="api_log_login")
    def api_log_login():
        data = json_body()
        ok = container.login_history_service.record(
            email=data.get("email"),
            success=bool(data.get("success")),
            method=data.get("method") or "password",
            ip_address=client_ip(request.headers),
            user_agent=request.headers.get("User-Agent"),
            user_id=data.get("userId"),
            error_message=data.get("errorMessage"),
        )
        # Logging is not critical: the caller always gets 200.
        return jsonify({"success": ok})

    @app.route("/api/admin/login-history", methods=["GET"], endpoint="api_login_history")
    @admin_required
    def api_login_history():
        try:
            success_s = optional_arg("success")
            page = container.login_history_service.query(
                email=optional_arg("email"),
                success=None if success_s is None else success_s == "true",
                start=_parse_datetime("startDate"),
                end=_parse_datetime("endDate"),
                limit=_parse_int("limit", DEFAULT_LOGIN_HISTORY_LIMIT),
                offset=_parse_int("offset", 0),
            )
            return jsonify(page.to_dict())
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error fetching login history")
            return server_error("Failed to fetch login history")
