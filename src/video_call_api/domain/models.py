"""Domain models for profiles, sessions and tokens."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the profile table."""

    uid: str
    display_name: str
    email: str
    photo_url: str | None
    created_at: datetime | None
    updated_at: datetime | None
    role: str | None = None


@dataclass(frozen=True)
class UpsertOutcome:
    """Result of a profile upsert."""

    profile: UserProfile
    created: bool

    @property
    def updated(self) -> bool:
        return not self.created

    @property
    def message(self) -> str:
        action = "created" if self.created else "updated"
        return f"User with UID {self.profile.uid} {action} successfully."


@dataclass(frozen=True)
class IssuedToken:
    """A directory token bound to one user. Never persisted."""

    token: str
    user_id: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class AuthContext:
    """Identity proven by the authentication layer."""

    uid: str


@dataclass(frozen=True)
class CallContext:
    """Invocation context handed to every operation."""

    auth: AuthContext | None = None
