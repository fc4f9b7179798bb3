from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_month
from ..common.http import login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/analytics", methods=["GET"], endpoint="analytics")
    @login_required
    def analytics():
        today = date.today()
        month_s = request.args.get("month") or today.strftime("%Y-%m")
        try:
            month = parse_month(month_s)
        except ValueError:
            raise ValidationError("month must be YYYY-MM") from None
        return ok(container.report_service.monthly_analytics(month, today=today))

    @app.route("/students/<int:student_id>/history", methods=["GET"], endpoint="student_history")
    @login_required
    def student_history(student_id: int):
        return ok(container.report_service.student_history(student_id))

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        return ok(container.report_service.dashboard(date.today()))
