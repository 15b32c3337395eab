from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.auth import admin_required, current_user, login_required
from ..common.datetime_utils import parse_iso_date
from ..common.responses import json_body, json_error, optional_arg, server_error
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AlreadyCheckedIn, DomainError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_status(value) -> AttendanceStatus:
        try:
            return AttendanceStatus(value)
        except ValueError:
            raise ValidationError(f"Invalid attendance status: {value!r}")

    def _optional_date(name: str):
        value = optional_arg(name)
        return parse_iso_date(value) if value else None

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        status = None
        if session.get("role") == Role.STUDENT.value:
            try:
                status = container.attendance_service.today_status(session["email"])
            except DomainError as e:
                flash(str(e), "warning")
        return render_template(
            "dashboard.html",
            current_user=current_user(),
            status=status,
            active_page="dashboard",
        )

    @app.route("/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        try:
            record = container.attendance_service.check_in(
                session["email"], comment=request.form.get("comment") or None
            )
            if record.status == AttendanceStatus.PRESENT_LATE:
                flash("Checked in (late).", "warning")
            else:
                flash("Checked in successfully!", "success")
        except AlreadyCheckedIn as e:
            flash(f"You already checked in today ({e.existing.status.value}).", "info")
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Check-in failed for %s", session.get("email"))
            flash("System error while checking in", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    @login_required
    def api_checkin():
        data = json_body()
        try:
            record = container.attendance_service.check_in(session["email"], comment=data.get("comment"))
            late = record.status == AttendanceStatus.PRESENT_LATE
            return jsonify(
                {
                    "success": True,
                    "attendance": record.to_dict(),
                    "message": "Checked in (late)" if late else "Checked in successfully",
                }
            )
        except AlreadyCheckedIn as e:
            return json_error(e, attendance=e.existing.to_dict())
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error checking in")
            return server_error()

    @app.route("/api/attendance/checkin", methods=["GET"], endpoint="api_checkin_status")
    @login_required
    def api_checkin_status():
        try:
            return jsonify(container.attendance_service.today_status(session["email"]))
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error fetching attendance")
            return server_error()

    @app.route("/api/attendance/admin", methods=["GET"], endpoint="api_attendance_admin")
    @admin_required
    def api_attendance_admin():
        try:
            return jsonify(container.attendance_service.week_overview())
        except Exception:
            logger.exception("Error fetching attendance overview")
            return server_error()

    @app.route("/api/attendance/admin", methods=["POST"], endpoint="api_attendance_mark")
    @admin_required
    def api_attendance_mark():
        data = json_body()
        try:
            if not data.get("studentEmail") or not data.get("date") or not data.get("status"):
                raise ValidationError("Missing required fields")

            record = container.attendance_service.mark(
                admin_email=session["email"],
                student_email=data["studentEmail"],
                session_date=parse_iso_date(data["date"]),
                status=_parse_status(data["status"]),
                comment=data.get("comment"),
            )
            return jsonify({"success": True, "attendance": record.to_dict()})
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error marking attendance")
            return server_error()

    @app.route("/api/attendance/admin/cycle", methods=["POST"], endpoint="api_attendance_cycle")
    @admin_required
    def api_attendance_cycle():
        data = json_body()
        try:
            if not data.get("studentEmail") or not data.get("date"):
                raise ValidationError("Missing required fields")

            record = container.attendance_service.cycle(
                admin_email=session["email"],
                student_email=data["studentEmail"],
                session_date=parse_iso_date(data["date"]),
            )
            return jsonify({"success": True, "attendance": record.to_dict()})
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error cycling attendance")
            return server_error()

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        overview = container.attendance_service.week_overview()
        return render_template(
            "admin/attendance.html",
            current_user=current_user(),
            overview=overview,
            active_page="admin_attendance",
        )

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @admin_required
    def api_attendance_summary():
        try:
            return jsonify(
                container.report_service.build_summary(start=_optional_date("from"), end=_optional_date("to"))
            )
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error building attendance summary")
            return server_error()

    @app.route("/api/attendance/export", methods=["GET"], endpoint="api_attendance_export")
    @admin_required
    def api_attendance_export():
        try:
            report = container.report_service.export_csv(start=_optional_date("from"), end=_optional_date("to"))
        except DomainError as e:
            return json_error(e)
        except Exception:
            logger.exception("Error exporting attendance")
            return server_error()

        return app.response_class(
            report.content.encode("utf-8-sig"),
            mimetype=report.mimetype,
            headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
        )
