from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthenticationRequired
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate users and resolve the acting identity."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def resolve_actor(self, user_id: Optional[int]) -> User:
        """Return the active user behind ``user_id`` or raise AuthenticationRequired."""

        if user_id is None:
            raise AuthenticationRequired("Not authenticated")
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise AuthenticationRequired("Not authenticated")
        return user
