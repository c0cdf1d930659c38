"""Caller identity checks shared by every authenticated operation."""

from typing import Protocol

from video_call_api.domain.errors import Unauthenticated
from video_call_api.domain.models import AuthContext, CallContext


class TokenVerifier(Protocol):
    """Interface for turning an access token into a verified identity."""

    def verify(self, token: str) -> AuthContext | None:
        """Return the verified identity, or None if the token is not valid."""


def require_caller(context: CallContext, message: str) -> str:
    """Return the verified caller uid or fail with Unauthenticated."""
    if context.auth is None or not context.auth.uid:
        raise Unauthenticated(message)
    return context.auth.uid


def build_context(verifier: TokenVerifier, authorization: str | None) -> CallContext:
    """Build a call context from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return CallContext()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return CallContext()
    return CallContext(auth=verifier.verify(token.strip()))
