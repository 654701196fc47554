from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.web import admin_required, date_arg, int_arg, json_errors, login_required
from ..container import Container
from ..core.constants import DEFAULT_RANKING_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/reports/daily", endpoint="report_daily")
    @admin_required
    @json_errors
    def report_daily():
        work_date = date_arg("date", container.attendance_service.today())
        report = container.report_service.daily_report(work_date)
        return jsonify({"rows": report.rows, "summary": report.summary})

    @app.route("/api/admin/reports/user", endpoint="report_user")
    @admin_required
    @json_errors
    def report_user():
        raw_user = request.args.get("user_id", "")
        if not raw_user.isdigit():
            raise ValidationError("Query parameter 'user_id' is required")

        end = date_arg("end", container.attendance_service.today())
        start = date_arg("start", end.replace(day=1))
        report = container.report_service.user_report(int(raw_user), start, end)
        return jsonify({"rows": report.rows, "summary": report.summary})

    @app.route("/api/admin/reports/stats", endpoint="report_stats")
    @admin_required
    @json_errors
    def report_stats():
        work_date = date_arg("date", container.attendance_service.today())
        return jsonify(container.report_service.attendance_stats(work_date))

    @app.route("/api/ranking", endpoint="ranking")
    @login_required
    @json_errors
    def ranking():
        end = date_arg("end", container.attendance_service.today())
        start = date_arg("start", end - timedelta(days=29))
        limit = int_arg("limit", DEFAULT_RANKING_LIMIT)
        return jsonify(container.report_service.ranking(start, end, limit=limit))
