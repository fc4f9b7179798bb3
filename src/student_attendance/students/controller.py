from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/students", methods=["GET"], endpoint="students_list")
    @login_required
    def students_list():
        order_by = request.args.get("order_by") or "roll_number"
        return ok(container.student_service.list_students(order_by=order_by))

    @app.route("/students", methods=["POST"], endpoint="students_register")
    @login_required
    def students_register():
        data = json_body()
        student_id = container.student_service.register(
            roll_number=data.get("roll_number"),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            department=data.get("department"),
            year=data.get("year"),
        )
        return ok({"student_id": student_id}, 201)

    @app.route("/subjects", methods=["GET"], endpoint="subjects_list")
    @login_required
    def subjects_list():
        return ok(container.subject_service.list_subjects())
