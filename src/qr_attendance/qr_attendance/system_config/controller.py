from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/config/geofence", methods=["GET"], endpoint="geofence_get")
    @admin_required
    @json_errors
    def geofence_get():
        return jsonify(container.system_config_service.get_geofence().to_dict())

    @app.route("/api/admin/config/geofence", methods=["PUT"], endpoint="geofence_update")
    @admin_required
    @json_errors
    def geofence_update():
        data = request.get_json(silent=True) or {}
        config = container.system_config_service.update_geofence(
            current_role=current_role(),
            latitude=data.get("lat"),
            longitude=data.get("lng"),
            radius_meters=data.get("radiusMeters"),
        )
        return jsonify({"success": True, "geofence": config.to_dict()})
