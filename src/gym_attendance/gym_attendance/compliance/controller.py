from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, current_user_id, json_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me/compliance", endpoint="me_compliance")
    @login_required
    @json_errors
    def me_compliance():
        return jsonify({"success": True, "compliance": container.compliance_service.member_status(current_user_id())})

    @app.route("/api/admin/compliance", endpoint="admin_compliance")
    @admin_required
    @json_errors
    def admin_compliance():
        rows = container.compliance_service.overview(current_role=current_role())
        return jsonify({"success": True, "members": rows})

    @app.route("/api/admin/compliance/run", methods=["POST"], endpoint="admin_compliance_run")
    @admin_required
    @json_errors
    def admin_compliance_run():
        """Run the monthly block/unblock check on demand (normally triggered by cron)."""
        results = container.compliance_service.run_monthly_check()
        return jsonify({"success": True, "message": "Attendance check completed", "results": results.to_dict()})

    @app.route("/api/admin/notifications/low-attendance", methods=["POST"], endpoint="admin_notify_low_attendance")
    @admin_required
    @json_errors
    def admin_notify_low_attendance():
        summary = container.notification_dispatcher.notify_low_attendance()
        return jsonify({"success": True, **summary.to_dict()})
