"""Directory token issuance for the authenticated caller."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from video_call_api.adapters.stream_directory_client import DirectoryClient
from video_call_api.domain.errors import Internal
from video_call_api.domain.models import CallContext, IssuedToken
from video_call_api.services.identity import require_caller

_logger = logging.getLogger(__name__)


@dataclass
class TokenService:
    """Mints short-lived directory tokens, only ever for the caller."""

    directory: DirectoryClient
    ttl: timedelta = timedelta(hours=24)

    def issue_token(self, context: CallContext) -> IssuedToken:
        """Return a token bound to the verified caller."""
        _logger.info("issueToken called")
        user_id = require_caller(
            context, "User must be authenticated to generate a Stream token."
        )
        issued_at = datetime.now(tz=UTC)
        expires_at = issued_at + self.ttl
        try:
            token = self.directory.create_token(user_id, issued_at, expires_at)
        except Exception as exc:
            _logger.exception("Failed to generate token: uid=%s", user_id)
            raise Internal("Unable to generate Stream token.") from exc
        issued = IssuedToken(
            token=token, user_id=user_id, issued_at=issued_at, expires_at=expires_at
        )
        _logger.info(
            "Token generated: uid=%s expires_at=%s",
            issued.user_id,
            issued.expires_at.isoformat(),
        )
        return issued
