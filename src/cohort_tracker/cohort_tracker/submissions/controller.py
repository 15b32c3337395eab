from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.auth import admin_required, login_required
from ..common.responses import json_body, json_error, server_error
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/submissions", methods=["GET"], endpoint="api_submissions")
    @login_required
    def api_submissions():
        try:
            submissions = container.submission_service.list_own(session["email"])
            return jsonify({"submissions": [s.to_dict() for s in submissions], "studentName": session.get("name")})
        except Exception:
            logger.exception("Error fetching submissions")
            return server_error()

    @app.route("/api/submissions", methods=["POST"], endpoint="api_submissions_create")
    @login_required
    def api_submissions_create():
        data = json_body()
        try:
            submission = container.submission_service.submit(
                session["email"],
                title=data.get("title", ""),
                work_done=data.get("workDone"),
                status=data.get("status", ""),
                blockers=data.get("blockers"),
                next_steps=data.get("nextSteps"),
                week=data.get("week"),
            )
            return jsonify({"success": True, "submission": submission.to_dict()})
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error submitting progress")
            return server_error()

    @app.route("/api/admin/submissions", methods=["GET"], endpoint="api_admin_submissions")
    @admin_required
    def api_admin_submissions():
        try:
            return jsonify(container.submission_service.list_all())
        except Exception:
            logger.exception("Error fetching admin submissions")
            return server_error()
