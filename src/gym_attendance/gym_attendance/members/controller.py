from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, json_body, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/members", methods=["GET"], endpoint="admin_members")
    @admin_required
    @json_errors
    def admin_members():
        members = container.member_service.list_members()
        return jsonify({"success": True, "members": [m.to_dict() for m in members]})

    @app.route("/api/admin/members", methods=["POST"], endpoint="admin_enroll_member")
    @admin_required
    @json_errors
    def admin_enroll_member():
        data = json_body()
        member_id = container.member_service.enroll(
            full_name=data.get("full_name", ""),
            document=data.get("document", ""),
            expected_weekly_visits=data.get("expected_weekly_visits"),
            link_type=data.get("link_type", "aluno"),
            email=data.get("email"),
            course=data.get("course"),
        )
        return jsonify({"success": True, "member_id": member_id}), 201

    @app.route("/api/admin/members/<int:member_id>/frequency", methods=["PATCH"], endpoint="admin_member_frequency")
    @admin_required
    @json_errors
    def admin_member_frequency(member_id: int):
        container.member_service.update_expected_frequency(
            current_role=current_role(),
            member_id=member_id,
            expected_weekly_visits=json_body().get("expected_weekly_visits"),
        )
        return jsonify({"success": True})

    @app.route("/api/admin/members/<int:member_id>/unblock", methods=["POST"], endpoint="admin_unblock_member")
    @admin_required
    @json_errors
    def admin_unblock_member(member_id: int):
        container.member_service.unblock(current_role=current_role(), member_id=member_id)
        return jsonify({"success": True, "message": "Member unblocked"})
