from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.auth import login_required
from ..common.responses import json_body, json_error, server_error
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/feedback", methods=["GET"], endpoint="api_feedback")
    @login_required
    def api_feedback():
        try:
            return jsonify({"feedback": [f.to_dict() for f in container.feedback_service.list_feedback()]})
        except Exception:
            logger.exception("Error fetching feedback")
            return server_error()

    @app.route("/api/feedback", methods=["POST"], endpoint="api_feedback_create")
    @login_required
    def api_feedback_create():
        data = json_body()
        try:
            feedback_id = container.feedback_service.submit(
                email=session["email"],
                name=session.get("name"),
                type=data.get("type", ""),
                title=data.get("title", ""),
                description=data.get("description", ""),
                page_url=data.get("pageUrl"),
            )
            return jsonify({"success": True, "feedbackId": str(feedback_id)})
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error submitting feedback")
            return server_error()

    @app.route("/api/feedback", methods=["PATCH"], endpoint="api_feedback_update")
    @login_required
    def api_feedback_update():
        data = json_body()
        try:
            if not data.get("feedbackId") or not data.get("action"):
                raise ValidationError("Missing required fields")
            try:
                feedback_id = int(data["feedbackId"])
            except (TypeError, ValueError):
                raise ValidationError("Invalid feedback id")

            action = data["action"]
            if action == "vote":
                voted = container.feedback_service.toggle_vote(feedback_id=feedback_id, email=session["email"])
                return jsonify({"success": True, "voted": voted})

            if action == "update":
                if session.get("role") != Role.ADMIN.value:
                    raise AuthorizationError("Forbidden - Admin access required")
                container.feedback_service.admin_update(
                    feedback_id=feedback_id,
                    status=data.get("status"),
                    admin_response=data.get("adminResponse"),
                )
                return jsonify({"success": True})

            raise ValidationError("Invalid action")
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error updating feedback")
            return server_error()
