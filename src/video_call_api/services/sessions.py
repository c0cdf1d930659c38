"""Video session creation."""

import logging
import secrets
import string
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from video_call_api.domain.errors import Internal, InvalidArgument
from video_call_api.domain.models import CallContext
from video_call_api.domain.sessions import SESSION_STATUS_ACTIVE, VideoSession
from video_call_api.services.identity import require_caller

_logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 7


class VideoSessionRepository(Protocol):
    """Persistence interface for video sessions."""

    def create_session(
        self,
        session_id: str,
        created_by: str,
        participants: list[str],
        status: str,
        created_at: datetime,
    ) -> VideoSession:
        """Insert a new session; raise AlreadyExists on an id collision."""


def generate_session_id(now: datetime) -> str:
    """Build an id from the epoch milliseconds and a short random suffix.

    No uniqueness check is made against the store.
    """
    suffix = "".join(
        secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH)
    )
    return f"session-{int(now.timestamp() * 1000)}-{suffix}"


def normalize_participants(raw: object, creator_id: str) -> list[str]:
    """Validate participants and make sure the creator is one of them."""
    if not isinstance(raw, list | tuple) or len(raw) < 1:
        raise InvalidArgument("Must provide an array of participant user IDs.")
    participants: list[str] = []
    for value in raw:
        if not isinstance(value, str) or not value.strip():
            raise InvalidArgument("Participant user IDs must be non-empty strings.")
        if value not in participants:
            participants.append(value)
    if creator_id not in participants:
        participants.append(creator_id)
    return participants


@dataclass
class VideoSessionService:
    """Creates session records for a group of participants."""

    repository: VideoSessionRepository

    def create_session(
        self, context: CallContext, data: Mapping[str, object]
    ) -> VideoSession:
        """Create an active session; every call produces a new session."""
        creator_id = require_caller(
            context, "User must be authenticated to create video sessions."
        )
        participants = normalize_participants(data.get("participants"), creator_id)
        created_at = datetime.now(tz=UTC)
        session_id = generate_session_id(created_at)
        _logger.info(
            "Creating video session: %s with participants: %s",
            session_id,
            ", ".join(participants),
        )
        try:
            return self.repository.create_session(
                session_id=session_id,
                created_by=creator_id,
                participants=participants,
                status=SESSION_STATUS_ACTIVE,
                created_at=created_at,
            )
        except Exception as exc:
            _logger.exception("Failed to create video session: %s", session_id)
            raise Internal("Failed to create video session.") from exc
