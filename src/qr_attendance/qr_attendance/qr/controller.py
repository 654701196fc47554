from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.web import admin_required, current_user_id, error_response, int_arg, json_errors
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import RejectionKind
from ..core.messages import QR_GENERATED, QR_REGENERATED, rejection_message
from .model import DailyQrCode
from .service import render_png


def _qr_to_dict(qr: DailyQrCode) -> dict:
    return {
        "date": qr.date.isoformat(),
        "code": qr.code,
        "issued_by": qr.issued_by,
        "issued_at": qr.issued_at.isoformat(),
        "expires_at": qr.expires_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qr/generate", methods=["POST"], endpoint="qr_generate")
    @admin_required
    @json_errors
    def qr_generate():
        issue = container.qr_service.generate_for_today(current_user_id())
        return jsonify(
            {
                "success": True,
                "code": issue.code,
                "date": issue.date.isoformat(),
                "is_new": issue.is_new,
                "message": QR_GENERATED,
            }
        )

    @app.route("/api/qr/regenerate", methods=["POST"], endpoint="qr_regenerate")
    @admin_required
    @json_errors
    def qr_regenerate():
        issue = container.qr_service.regenerate_for_today(current_user_id())
        return jsonify(
            {
                "success": True,
                "code": issue.code,
                "date": issue.date.isoformat(),
                "is_new": issue.is_new,
                "message": QR_REGENERATED,
            }
        )

    @app.route("/api/qr/today", endpoint="qr_today")
    @admin_required
    @json_errors
    def qr_today():
        qr = container.qr_service.get_today()
        if not qr:
            return error_response(rejection_message(RejectionKind.NO_QR), 404)
        return jsonify(_qr_to_dict(qr))

    @app.route("/api/qr/today.png", endpoint="qr_today_png")
    @admin_required
    @json_errors
    def qr_today_png():
        qr = container.qr_service.get_today()
        if not qr:
            return error_response(rejection_message(RejectionKind.NO_QR), 404)
        return send_file(
            io.BytesIO(render_png(qr.code)),
            mimetype="image/png",
            download_name=f"qr_{qr.date.isoformat()}.png",
        )

    @app.route("/api/qr/history", endpoint="qr_history")
    @admin_required
    @json_errors
    def qr_history():
        limit = int_arg("limit", DEFAULT_HISTORY_LIMIT)
        return jsonify([_qr_to_dict(q) for q in container.qr_service.history(limit=limit)])
