from __future__ import annotations

from typing import Optional

from ..core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from ..users.model import User
from ..users.repository import UserRepository


class AccessControl:
    """Resolve the caller and gate role-restricted operations.

    The role always comes from the persisted User, looked up by email on every
    call. Anything the client asserts about its role is ignored.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def resolve(self, email: Optional[str]) -> User:
        if not email:
            raise UnauthorizedError("Unauthorized")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise NotFoundError("User not found")
        return user

    def resolve_admin(self, email: Optional[str]) -> User:
        user = self.resolve(email)
        self.require_admin(user)
        return user

    @staticmethod
    def require_admin(user: User) -> None:
        if not user.is_admin:
            raise ForbiddenError("Admin access required")
