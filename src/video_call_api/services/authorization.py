"""Authorization rule for reading another user's profile."""

import logging
from dataclasses import dataclass

from video_call_api.domain.errors import PermissionDenied
from video_call_api.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass
class AuthorizationPolicy:
    """Single-hop, role-based check: only admins read other profiles."""

    repository: ProfileRepository

    def ensure_can_read(self, requester_id: str, target_id: str) -> None:
        """Raise PermissionDenied unless requester may read target's profile.

        A failed lookup of the requester's own profile is reported as a
        denial as well; the underlying cause is only logged.
        """
        if requester_id == target_id:
            return
        try:
            requester = self.repository.get(requester_id)
        except Exception as exc:
            _logger.exception(
                "Admin check lookup failed: requester=%s target=%s",
                requester_id,
                target_id,
            )
            raise PermissionDenied("Failed to verify permissions.") from exc
        if requester is None or requester.role != ADMIN_ROLE:
            _logger.warning(
                "Profile read denied: requester=%s target=%s", requester_id, target_id
            )
            raise PermissionDenied("Only admins can access other user profiles.")
