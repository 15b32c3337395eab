from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.auth import admin_required, login_required
from ..common.responses import json_body, json_error, server_error
from ..container import Container
from ..core.enums import LoginMethod
from ..core.exceptions import AuthenticationError, DomainError
from ..logins.service import client_ip

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "email" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=5)

                session["email"] = s_user.email
                session["name"] = s_user.name
                session["role"] = s_user.role.value
                session["team"] = s_user.team

                container.login_history_service.record(
                    email=s_user.email,
                    success=True,
                    method=LoginMethod.PASSWORD,
                    ip_address=client_ip(request.headers),
                    user_agent=request.headers.get("User-Agent"),
                )
                flash("Logged in.", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                container.login_history_service.record(
                    email=email or None,
                    success=False,
                    method=LoginMethod.PASSWORD,
                    ip_address=client_ip(request.headers),
                    user_agent=request.headers.get("User-Agent"),
                    error_message=str(e),
                )
                flash(str(e), "danger")
            except Exception:
                logger.exception("Login failed for %s", email)
                flash("System error while logging in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/api/user/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def api_profile():
        try:
            return jsonify(container.profile_service.get_profile(session["email"]))
        except Exception:
            logger.exception("Error fetching profile")
            return server_error()

    @app.route("/api/user/profile", methods=["POST"], endpoint="api_profile_create")
    @admin_required
    def api_profile_create():
        data = json_body()
        try:
            profile, created = container.profile_service.ensure_profile(
                data.get("email", ""),
                name=data.get("name"),
                role=data.get("role"),
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Profile created" if created else "Profile already exists",
                    "student": profile,
                }
            )
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error creating profile")
            return server_error()

    @app.route("/api/stats", methods=["GET"], endpoint="api_stats")
    def api_stats():
        try:
            return jsonify(container.profile_service.course_stats())
        except Exception:
            logger.exception("Error fetching stats")
            return server_error()
