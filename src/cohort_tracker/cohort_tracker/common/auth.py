from __future__ import annotations

from functools import wraps

from flask import flash, jsonify, redirect, render_template, request, session, url_for

from ..core.enums import Role


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def current_user() -> dict:
    return {"full_name": session.get("name"), "email": session.get("email"), "role": session.get("role")}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "email" not in session:
            if _wants_json():
                return jsonify({"error": "Unauthorized"}), 401
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "email" not in session:
            if _wants_json():
                return jsonify({"error": "Unauthorized"}), 401
            return redirect(url_for("login"))

        if session.get("role") != Role.ADMIN.value:
            if _wants_json():
                return jsonify({"error": "Forbidden - Admin access required"}), 403
            return render_template("403.html", current_user=current_user()), 403

        return view(*args, **kwargs)

    return wrapper
