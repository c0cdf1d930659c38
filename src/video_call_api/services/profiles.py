"""Profile upsert and profile read operations."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from video_call_api.adapters.stream_directory_client import DirectoryClient
from video_call_api.domain.errors import (
    AlreadyExists,
    Internal,
    InvalidArgument,
    NotFound,
)
from video_call_api.domain.models import CallContext, UpsertOutcome, UserProfile
from video_call_api.services.identity import require_caller

if TYPE_CHECKING:
    from video_call_api.services.authorization import AuthorizationPolicy

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles keyed by uid."""

    def get(self, uid: str) -> UserProfile | None:
        """Return the profile for a uid, if present."""

    def create(
        self, uid: str, display_name: str, email: str, photo_url: str | None
    ) -> UserProfile:
        """Create a profile with equal timestamps; AlreadyExists if uid is taken."""

    def update(
        self, uid: str, display_name: str, email: str, photo_url: str | None
    ) -> UserProfile:
        """Overwrite name, email, photo and update timestamp only."""


@dataclass(frozen=True)
class ProfileInput:
    """Validated upsert payload."""

    uid: str
    display_name: str
    email: str
    photo_url: str | None


def parse_profile_input(data: Mapping[str, object]) -> ProfileInput:
    """Validate an upsert payload, checking uid, name and email in order."""
    uid = data.get("uid")
    if not isinstance(uid, str) or not uid.strip():
        raise InvalidArgument("The function must be called with a valid uid.")
    display_name = data.get("displayName")
    if not isinstance(display_name, str) or not display_name.strip():
        raise InvalidArgument("The function must be called with a valid displayName.")
    email = data.get("email")
    if not isinstance(email, str) or "@" not in email:
        raise InvalidArgument("The function must be called with a valid email.")
    photo_url = data.get("photoURL")
    if photo_url is not None and not isinstance(photo_url, str):
        raise InvalidArgument("The function must be called with a valid photoURL.")
    return ProfileInput(
        uid=uid,
        display_name=display_name,
        email=email,
        photo_url=photo_url or None,
    )


@dataclass
class ProfileService:
    """Application service for profile lifecycle and lookup."""

    repository: ProfileRepository
    directory: DirectoryClient
    policy: "AuthorizationPolicy"

    def upsert_profile(self, profile: ProfileInput) -> UpsertOutcome:
        """Create the profile if absent, else update it in place."""
        existing = self.repository.get(profile.uid)
        if existing is None:
            try:
                created = self.repository.create(
                    profile.uid, profile.display_name, profile.email, profile.photo_url
                )
            except AlreadyExists:
                # A concurrent upsert inserted the row first; overwrite it.
                _logger.info("Profile created concurrently: uid=%s", profile.uid)
            else:
                _logger.info("Profile created: uid=%s", profile.uid)
                return UpsertOutcome(profile=created, created=True)
        updated = self.repository.update(
            profile.uid, profile.display_name, profile.email, profile.photo_url
        )
        _logger.info("Profile already exists, updated: uid=%s", profile.uid)
        return UpsertOutcome(profile=updated, created=False)

    async def upsert_user(self, data: Mapping[str, object]) -> UpsertOutcome:
        """Validate, upsert the profile, then mirror it to the directory."""
        _logger.info("upsertUser called")
        profile = parse_profile_input(data)
        try:
            outcome = self.upsert_profile(profile)
        except Exception as exc:
            _logger.exception("Failed to upsert profile: uid=%s", profile.uid)
            raise Internal("Failed to create user.") from exc
        await self._register_in_directory(profile)
        return outcome

    def read_profile(
        self, context: CallContext, data: Mapping[str, object]
    ) -> UserProfile:
        """Return the caller's profile, or another user's for admins."""
        caller_id = require_caller(
            context, "User must be authenticated to access profiles."
        )
        target_id = data.get("userId")
        if target_id is not None and not isinstance(target_id, str):
            raise InvalidArgument("userId must be a string.")
        if target_id and target_id.strip() and target_id != caller_id:
            self.policy.ensure_can_read(caller_id, target_id)
        else:
            target_id = caller_id
        try:
            profile = self.repository.get(target_id)
        except Exception as exc:
            _logger.exception("Failed to fetch profile: uid=%s", target_id)
            raise Internal("Failed to fetch user profile.") from exc
        if profile is None:
            raise NotFound(f"User with ID {target_id} not found.")
        return profile

    async def _register_in_directory(self, profile: ProfileInput) -> None:
        # Failures are logged only; the stored profile stands either way.
        try:
            await self.directory.upsert_user(
                profile.uid, profile.display_name, profile.photo_url
            )
        except Exception:
            _logger.warning(
                "Failed to register directory user: uid=%s", profile.uid, exc_info=True
            )
            return
        _logger.info("Directory user registered: uid=%s", profile.uid)
