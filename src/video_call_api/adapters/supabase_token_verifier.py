"""Verification of Supabase-issued access tokens."""

import logging
from dataclasses import dataclass

import jwt

from video_call_api.domain.models import AuthContext
from video_call_api.services.identity import TokenVerifier

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseTokenVerifier(TokenVerifier):
    """Checks HS256 access tokens signed with the project JWT secret."""

    jwt_secret: str
    audience: str = "authenticated"

    def verify(self, token: str) -> AuthContext | None:
        """Return the identity in the token, or None if it does not verify."""
        try:
            claims = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=self.audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            _logger.info("Rejected access token: %s", exc)
            return None
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            return None
        return AuthContext(uid=subject)
