"""Typed failures surfaced by the callable operations."""


class ServiceError(Exception):
    """Base error carrying a wire status and a user-facing message."""

    status = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(ServiceError):
    """The call carries no verified identity."""

    status = "UNAUTHENTICATED"


class InvalidArgument(ServiceError):
    """A caller-supplied field is missing or malformed."""

    status = "INVALID_ARGUMENT"


class PermissionDenied(ServiceError):
    """The authorization rule rejected the caller or could not complete."""

    status = "PERMISSION_DENIED"


class NotFound(ServiceError):
    """The requested entity does not exist."""

    status = "NOT_FOUND"


class AlreadyExists(ServiceError):
    """A record with the same key is already stored."""

    status = "ALREADY_EXISTS"


class Internal(ServiceError):
    """A dependency failed unexpectedly."""

    status = "INTERNAL"
