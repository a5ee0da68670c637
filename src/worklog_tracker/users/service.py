from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, DuplicateKeyError, InternalError, NotFoundError
from .model import IdentityProfile, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: map an external identity onto a User, creating it on first sight."""

    def __init__(self, users: UserRepository):
        self._users = users

    def sign_in(self, profile: IdentityProfile) -> User:
        email = require_email(profile.email)

        existing = self._users.get_by_email(email)
        if existing:
            if not existing.google_id and profile.subject:
                self._users.set_google_id(existing.user_id, profile.subject)
            logger.info("Existing user signed in: %s", existing.user_id)
            return self._users.get_by_id(existing.user_id) or existing

        name = require_non_empty(profile.name or email, "name")
        try:
            user_id = self._users.create_user(
                email=email,
                name=name,
                image=profile.image,
                google_id=profile.subject or None,
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent first sign-in for the same email.
            user = self._users.get_by_email(email)
            if not user:
                raise ConflictError("This Google account is linked to another user")
            return user

        user = self._users.get_by_id(user_id)
        if not user:
            raise InternalError("User was created but could not be loaded")
        logger.info("Created new user %s for %s", user.user_id, email)
        return user


class UserService:
    """Use case: manage users (admin tooling)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def promote_to_admin(self, email: str) -> User:
        email = require_email(email)
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError(f"User with email {email} not found")

        if not user.is_admin:
            self._users.set_role(user.user_id, Role.ADMIN)
            logger.info("Promoted user %s to admin", user.user_id)
        return self._users.get_by_id(user.user_id) or user

    def list_users(self, role: Optional[Role] = None) -> Sequence[User]:
        return self._users.list_by_role(role)
