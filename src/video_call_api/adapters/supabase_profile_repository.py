"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from postgrest.exceptions import APIError
from supabase import Client

from video_call_api.domain.errors import AlreadyExists
from video_call_api.domain.models import UserProfile
from video_call_api.services.profiles import ProfileRepository

_COLUMNS = "uid, display_name, email, photo_url, role, created_at, updated_at"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client
    table: str = "users_"

    def get(self, uid: str) -> UserProfile | None:
        """Return the profile for a uid, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("uid", uid)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_profile(response.data[0])

    def create(
        self, uid: str, display_name: str, email: str, photo_url: str | None
    ) -> UserProfile:
        """Insert a new profile row; both timestamps share one instant."""
        now = datetime.now(tz=UTC).isoformat()
        try:
            response = (
                self.client.table(self.table)
                .insert(
                    {
                        "uid": uid,
                        "display_name": display_name,
                        "email": email,
                        "photo_url": photo_url,
                        "created_at": now,
                        "updated_at": now,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise AlreadyExists(f"Profile {uid} already exists.") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _to_profile(response.data[0])

    def update(
        self, uid: str, display_name: str, email: str, photo_url: str | None
    ) -> UserProfile:
        """Overwrite mutable fields; role and created_at are left untouched."""
        response = (
            self.client.table(self.table)
            .update(
                {
                    "display_name": display_name,
                    "email": email,
                    "photo_url": photo_url,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("uid", uid)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update profile in Supabase")
        return _to_profile(response.data[0])


def _to_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        uid=str(row["uid"]),
        display_name=str(row["display_name"]),
        email=str(row["email"]),
        photo_url=row.get("photo_url"),  # type: ignore[arg-type]
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
        role=row.get("role"),  # type: ignore[arg-type]
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
