from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.web import current_user_id, date_arg, int_arg, json_errors, login_required
from ..container import Container
from ..core.enums import EmployeeType, RejectionKind
from ..core.messages import ATTENDANCE_REGISTERED
from .model import Accepted

# HTTP status per rejection kind; anything not listed is a client-side 400
_REJECTION_STATUS = {
    RejectionKind.DUPLICATE: 409,
    RejectionKind.GENERIC: 500,
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @login_required
    @json_errors
    def attendance_scan():
        data = request.get_json(silent=True) or {}
        code = str(data.get("code") or data.get("qr_code") or "")

        result = container.attendance_service.register_scan(current_user_id(), code, data.get("position"))
        if isinstance(result, Accepted):
            body = result.to_dict()
            body["message"] = ATTENDANCE_REGISTERED
            return jsonify(body), 200
        return jsonify(result.to_dict()), _REJECTION_STATUS.get(result.kind, 400)

    @app.route("/api/attendance/can-register", endpoint="attendance_can_register")
    @login_required
    @json_errors
    def attendance_can_register():
        return jsonify(container.attendance_service.can_register_today(current_user_id()))

    @app.route("/api/attendance/monthly", endpoint="attendance_monthly")
    @login_required
    @json_errors
    def attendance_monthly():
        today = container.attendance_service.today()
        year = int_arg("year", today.year)
        month = int_arg("month", today.month)
        dates = container.attendance_service.monthly_dates(current_user_id(), year, month)
        return jsonify({"year": year, "month": month, "dates": dates})

    @app.route("/api/attendance/history", endpoint="attendance_history")
    @login_required
    @json_errors
    def attendance_history():
        today = container.attendance_service.today()
        end = date_arg("end", today)
        start = date_arg("start", end - timedelta(days=29))
        records = container.attendance_service.history(current_user_id(), start, end)
        return jsonify(
            [
                {"date": r.date.isoformat(), "timestamp": r.timestamp.isoformat(), "qr_code": r.qr_code}
                for r in records
            ]
        )

    @app.route("/api/attendance/window", endpoint="attendance_window")
    @login_required
    @json_errors
    def attendance_window():
        return jsonify(container.attendance_service.window_status())

    @app.route("/api/attendance/client-config", endpoint="attendance_client_config")
    @login_required
    @json_errors
    def attendance_client_config():
        profile = container.profile_service.get_profile(current_user_id())
        fence = container.system_config_service.get_geofence()
        return jsonify(
            {
                "employee_type": profile.employee_type.value,
                "requires_location": profile.employee_type == EmployeeType.ONSITE,
                "gps": container.attendance_service.gps_options.to_client(),
                "geofence": fence.to_dict(),
                "window": container.attendance_service.window_status()["window"],
            }
        )
