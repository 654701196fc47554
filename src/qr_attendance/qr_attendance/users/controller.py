from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, current_role, json_errors, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("User %s logged in", s_user.user_id)
        return jsonify(
            {
                "success": True,
                "user": {"user_id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value},
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    @json_errors
    def me():
        user_id = int(session["user_id"])
        profile = container.profile_service.get_profile(user_id)
        return jsonify(
            {
                "user_id": user_id,
                "full_name": session.get("name"),
                "role": session.get("role"),
                "employee_type": profile.employee_type.value,
                "employee_type_is_default": profile.is_default,
            }
        )

    @app.route("/api/admin/users", endpoint="admin_users")
    @admin_required
    @json_errors
    def admin_users():
        users = container.repos.users.list_all()
        return jsonify(
            [
                {
                    "user_id": u.user_id,
                    "full_name": u.full_name,
                    "username": u.username,
                    "role": u.role.value,
                    "employee_type": u.employee_type.value if u.employee_type else None,
                    "is_active": u.is_active,
                }
                for u in users
            ]
        )

    @app.route("/api/admin/users/<int:user_id>/employee-type", methods=["PUT"], endpoint="set_employee_type")
    @admin_required
    @json_errors
    def set_employee_type(user_id: int):
        data = request.get_json(silent=True) or {}
        profile = container.profile_service.set_employee_type(
            current_role=current_role(),
            user_id=user_id,
            employee_type=data.get("employee_type"),
        )
        return jsonify({"success": True, "user_id": profile.user_id, "employee_type": profile.employee_type.value})
