"""Domain models for video sessions."""

from dataclasses import dataclass
from datetime import datetime

SESSION_STATUS_ACTIVE = "active"


@dataclass(frozen=True)
class VideoSession:
    """Represents a persisted multi-participant video session."""

    id: str
    created_by: str
    participants: list[str]
    status: str
    created_at: datetime
