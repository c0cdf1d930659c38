"""Pydantic models for the callable request/response envelope."""

from typing import Any

from pydantic import BaseModel


class CallableRequest(BaseModel):
    """Request envelope: the operation input sits under ``data``."""

    data: dict[str, Any] | None = None


class CallableError(BaseModel):
    """Error body returned for a failed call."""

    status: str
    message: str


class CallableErrorResponse(BaseModel):
    """Error envelope."""

    error: CallableError
