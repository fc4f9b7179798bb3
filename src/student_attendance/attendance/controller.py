from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import current_user_id, date_arg, int_arg, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/sheet", methods=["GET"], endpoint="attendance_sheet")
    @login_required
    def attendance_sheet():
        subject_id = int_arg(request.args.get("subject_id"), "subject_id")
        if subject_id is None:
            raise ValidationError("Please select a subject")
        attendance_date = date_arg(request.args.get("date"), "date", default=date.today())
        rows = container.attendance_service.marking_sheet(subject_id=subject_id, attendance_date=attendance_date)
        return ok({"subject_id": subject_id, "date": attendance_date, "students": rows})

    @app.route("/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        data = json_body()
        entries = data.get("entries")
        if entries is not None and not isinstance(entries, dict):
            raise ValidationError("entries must map student ids to statuses")

        written = container.attendance_service.mark_attendance(
            actor_id=current_user_id(),
            subject_id=int_arg(data.get("subject_id"), "subject_id"),
            attendance_date=date_arg(data.get("date"), "date"),
            entries=entries,
        )
        return ok({"written": written})

    @app.route("/attendance/records", methods=["GET"], endpoint="attendance_records")
    @login_required
    def attendance_records():
        subject_id = int_arg(request.args.get("subject_id"), "subject_id")
        return ok(container.report_service.attendance_records(subject_id=subject_id))
