from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import admin_required, date_arg, json_errors
from ..container import Container
from ..core.exceptions import NotFoundError
from .csv_export import report_to_csv
from .service import ReportData


def register(app: Flask, container: Container) -> None:
    svc = container.report_service

    def _build(kind: str) -> ReportData:
        if kind == "attendance":
            return svc.attendance_report(start=date_arg("start"), end=date_arg("end"), search=request.args.get("search"))
        if kind == "members":
            return svc.members_report()
        if kind == "monthly":
            return svc.monthly_report()
        if kind == "low-frequency":
            return svc.low_frequency_report()
        raise NotFoundError(f"Unknown report: {kind}")

    @app.route("/api/admin/reports/<kind>", endpoint="admin_report")
    @admin_required
    @json_errors
    def admin_report(kind: str):
        return jsonify({"success": True, **_build(kind).to_dict()})

    @app.route("/api/admin/reports/<kind>/csv", endpoint="admin_report_csv")
    @admin_required
    @json_errors
    def admin_report_csv(kind: str):
        data = _build(kind)
        filename = f"{kind}_report_{date.today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            report_to_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
