from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee known to the system.

    Note: Plain data object, no database access here.
    """

    user_id: int
    email: str
    name: str
    role: Role = Role.USER
    image: Optional[str] = None
    google_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "image": self.image,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class IdentityProfile:
    """What the external identity provider hands back after login."""

    subject: str
    email: str
    name: str
    image: Optional[str] = None
