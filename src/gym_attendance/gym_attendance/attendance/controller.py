from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from .qr import render_qr_png
from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    date_arg,
    json_body,
    json_errors,
    login_required,
)
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/qr/rotate", methods=["POST"], endpoint="admin_qr_rotate")
    @admin_required
    @json_errors
    def admin_qr_rotate():
        """Issue a new check-in code; the admin screen calls this on every rotation tick."""
        issued = container.attendance_service.rotate_qr_code(current_role=current_role())
        return jsonify({"success": True, **issued.to_dict()})

    @app.route("/api/admin/qr/image", endpoint="admin_qr_image")
    @admin_required
    @json_errors
    def admin_qr_image():
        code = (request.args.get("code") or "").strip()
        if not code:
            raise ValidationError("code is required")
        return send_file(io.BytesIO(render_qr_png(code)), mimetype="image/png")

    @app.route("/api/checkin/qr", methods=["POST"], endpoint="api_checkin_qr")
    @login_required
    @json_errors
    def api_checkin_qr():
        visit_id = container.attendance_service.check_in(current_user_id(), json_body().get("code", ""))
        return jsonify({"success": True, "visit_id": visit_id, "message": "Attendance registered"})

    @app.route("/api/checkin/qr/image", methods=["POST"], endpoint="api_checkin_qr_image")
    @login_required
    @json_errors
    def api_checkin_qr_image():
        """Accept an uploaded photo, decode the QR code in it and check in."""
        if "image" not in request.files:
            raise ValidationError("Missing image file")
        visit_id = container.attendance_service.check_in_from_image(current_user_id(), request.files["image"].stream)
        return jsonify({"success": True, "visit_id": visit_id, "message": "Attendance registered"})

    @app.route("/api/me/history", endpoint="me_history")
    @login_required
    @json_errors
    def me_history():
        return jsonify({"success": True, "visits": container.attendance_service.get_history_ui(current_user_id())})

    @app.route("/api/admin/attendance", endpoint="admin_attendance_records")
    @admin_required
    @json_errors
    def admin_attendance_records():
        rows = container.attendance_service.list_records(
            start=date_arg("start"),
            end=date_arg("end"),
            search=request.args.get("search"),
        )
        return jsonify(
            {
                "success": True,
                "records": [
                    {
                        "visit_id": r.visit_id,
                        "member_id": r.member_id,
                        "full_name": r.full_name,
                        "document": r.document,
                        "status": r.compliance_status,
                        "visited_at": r.timestamp.isoformat(),
                    }
                    for r in rows
                ],
            }
        )

    @app.route("/api/admin/attendance", methods=["POST"], endpoint="admin_register_visit")
    @admin_required
    @json_errors
    def admin_register_visit():
        """Front-desk check-in for a member without a phone."""
        visit_id = container.attendance_service.register_manual_visit(
            current_role=current_role(),
            member_id=json_body().get("member_id"),
        )
        return jsonify({"success": True, "visit_id": visit_id, "message": "Attendance registered"}), 201
