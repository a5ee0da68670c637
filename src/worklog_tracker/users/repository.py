from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        name: str,
        image: Optional[str],
        google_id: Optional[str],
        role: Role = Role.USER,
    ) -> int:
        """Insert a user; raises DuplicateKeyError when email or google_id is taken."""

        raise NotImplementedError

    def set_google_id(self, user_id: int, google_id: str) -> bool:
        raise NotImplementedError

    def set_role(self, user_id: int, role: Role) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError
