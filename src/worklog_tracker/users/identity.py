"""Google sign-in: turn an ID token into an IdentityProfile."""

from __future__ import annotations

import logging

from google.auth.transport import requests
from google.oauth2 import id_token

from ..core.exceptions import UnauthorizedError
from .model import IdentityProfile

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = {"accounts.google.com", "https://accounts.google.com"}


class GoogleIdentityProvider:
    def __init__(self, client_id: str):
        self._client_id = client_id

    def verify(self, credential: str) -> IdentityProfile:
        """Verify a Google ID token and extract the user profile.

        Raises UnauthorizedError if the token is missing, invalid, issued for
        another client, or carries no email.
        """
        if not credential:
            raise UnauthorizedError("Missing Google credential")
        if not self._client_id:
            raise UnauthorizedError("Google sign-in is not configured")

        try:
            idinfo = id_token.verify_oauth2_token(credential, requests.Request(), self._client_id)
        except ValueError as e:
            logger.warning("Rejected Google ID token: %s", e)
            raise UnauthorizedError("Invalid Google credential")

        if idinfo.get("iss") not in GOOGLE_ISSUERS:
            raise UnauthorizedError("Invalid Google credential issuer")

        email = (idinfo.get("email") or "").strip().lower()
        if not email:
            raise UnauthorizedError("Google account has no email")

        return IdentityProfile(
            subject=str(idinfo["sub"]),
            email=email,
            name=idinfo.get("name") or email,
            image=idinfo.get("picture"),
        )
