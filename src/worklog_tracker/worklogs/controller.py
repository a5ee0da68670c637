from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.http import SESSION_EMAIL_KEY, json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def register(app: Flask, container: Container) -> None:
    def current_user():
        return container.access_control.resolve(session.get(SESSION_EMAIL_KEY))

    @app.route("/api/work/start", methods=["POST"], endpoint="work_start")
    @login_required
    def work_start():
        log = container.attendance_service.start_session(current_user())
        return jsonify({"success": True, "message": "Work started successfully", "workLog": log.to_dict()})

    @app.route("/api/work/end", methods=["POST"], endpoint="work_end")
    @login_required
    def work_end():
        log = container.attendance_service.end_session(current_user())
        return jsonify({"success": True, "message": "Work ended successfully", "workLog": log.to_dict()})

    @app.route("/api/work/week-off", methods=["POST"], endpoint="work_week_off")
    @login_required
    def work_week_off():
        user = current_user()
        data = json_body()
        start_s = data.get("startDate")
        end_s = data.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("Start date and end date are required")

        created = container.attendance_service.mark_week_off(user, parse_iso_date(start_s), parse_iso_date(end_s))
        return jsonify(
            {
                "success": True,
                "message": f"Week off marked successfully for {created} working days",
                "created": created,
            }
        )

    @app.route("/api/work/today", methods=["GET"], endpoint="work_today")
    @login_required
    def work_today():
        log = container.attendance_service.today_log(current_user())
        return jsonify({"success": True, "workLog": log.to_dict() if log else None})

    @app.route("/api/work/logs", methods=["GET"], endpoint="work_logs")
    @login_required
    def work_logs():
        history = container.attendance_service.history(
            current_user(),
            page=_int_arg("page", 1),
            limit=_int_arg("limit", DEFAULT_HISTORY_LIMIT),
        )
        return jsonify({"success": True, **history.to_dict()})
