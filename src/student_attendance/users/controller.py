from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import current_user_id, fail, json_body, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("username", "")), str(data.get("password", "")))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return ok(s_user)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.users_repo.get_by_id(current_user_id())
        if not user or not user.is_active:
            session.clear()
            return fail("Please sign in to continue", 401)
        return ok({"user_id": user.user_id, "full_name": user.full_name, "role": user.role})
