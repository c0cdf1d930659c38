"""Supabase-backed video session repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from video_call_api.domain.errors import AlreadyExists
from video_call_api.domain.sessions import VideoSession
from video_call_api.services.sessions import VideoSessionRepository

_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseVideoSessionRepository(VideoSessionRepository):
    """Supabase implementation for video sessions."""

    client: Client
    table: str = "videoSessions"

    def create_session(
        self,
        session_id: str,
        created_by: str,
        participants: list[str],
        status: str,
        created_at: datetime,
    ) -> VideoSession:
        """Insert a session row and return it."""
        try:
            response = (
                self.client.table(self.table)
                .insert(
                    {
                        "id": session_id,
                        "created_by": created_by,
                        "participants": participants,
                        "status": status,
                        "created_at": created_at.isoformat(),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise AlreadyExists(f"Session {session_id} already exists.") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create video session")
        row = response.data[0]
        return VideoSession(
            id=row["id"],
            created_by=row["created_by"],
            participants=list(row["participants"]),
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
