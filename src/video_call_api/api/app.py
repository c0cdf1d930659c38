"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from video_call_api.api.callable_models import (
    CallableError,
    CallableErrorResponse,
    CallableRequest,
)
from video_call_api.app_logging import configure_logging
from video_call_api.containers import AppContainer
from video_call_api.domain.errors import ServiceError
from video_call_api.domain.models import IssuedToken, UpsertOutcome, UserProfile
from video_call_api.domain.sessions import VideoSession
from video_call_api.services.identity import build_context

_HTTP_STATUS = {
    "UNAUTHENTICATED": 401,
    "INVALID_ARGUMENT": 400,
    "PERMISSION_DENIED": 403,
    "NOT_FOUND": 404,
    "ALREADY_EXISTS": 409,
    "INTERNAL": 500,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ServiceError)
    async def service_error_handler(
        request: Request, exc: ServiceError
    ) -> JSONResponse:
        logger.info("%s failed: %s %s", request.url.path, exc.status, exc.message)
        return _error_response(exc.status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response("INVALID_ARGUMENT", "Request body must be an object.")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/issueToken")
    @app.post("/generateStreamToken")
    async def issue_token(
        request: Request,
        payload: CallableRequest | None = None,
        authorization: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Mint a directory token for the caller."""
        state_container: AppContainer = request.app.state.container
        context = build_context(state_container.token_verifier, authorization)
        issued = state_container.token_service.issue_token(context)
        return {"result": _serialize_token(issued)}

    @app.post("/upsertUser")
    @app.post("/createUser")
    async def upsert_user(
        request: Request, payload: CallableRequest | None = None
    ) -> dict[str, object]:
        """Create or update a user profile."""
        state_container: AppContainer = request.app.state.container
        outcome = await state_container.profile_service.upsert_user(_data(payload))
        return {"result": _serialize_outcome(outcome)}

    @app.post("/readProfile")
    @app.post("/getUserProfile")
    async def read_profile(
        request: Request,
        payload: CallableRequest | None = None,
        authorization: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Return the caller's profile or, for admins, another user's."""
        state_container: AppContainer = request.app.state.container
        context = build_context(state_container.token_verifier, authorization)
        profile = state_container.profile_service.read_profile(context, _data(payload))
        return {"result": _serialize_profile(profile)}

    @app.post("/createSession")
    @app.post("/createVideoSession")
    async def create_session(
        request: Request,
        payload: CallableRequest | None = None,
        authorization: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Create a video session that includes the caller."""
        state_container: AppContainer = request.app.state.container
        context = build_context(state_container.token_verifier, authorization)
        session = state_container.video_session_service.create_session(
            context, _data(payload)
        )
        return {"result": _serialize_session(session)}

    return app


def _data(payload: CallableRequest | None) -> dict[str, object]:
    if payload is None or payload.data is None:
        return {}
    return payload.data


def _error_response(status: str, message: str) -> JSONResponse:
    body = CallableErrorResponse(error=CallableError(status=status, message=message))
    return JSONResponse(status_code=_HTTP_STATUS[status], content=body.model_dump())


def _epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _serialize_token(issued: IssuedToken) -> dict[str, object]:
    return {
        "token": issued.token,
        "expiresAt": _epoch_millis(issued.expires_at),
        "generatedAt": issued.issued_at.isoformat(),
    }


def _serialize_outcome(outcome: UpsertOutcome) -> dict[str, object]:
    flag = "created" if outcome.created else "updated"
    return {"result": outcome.message, flag: True}


def _serialize_profile(profile: UserProfile) -> dict[str, object]:
    # Role and update timestamp stay internal.
    return {
        "uid": profile.uid,
        "displayName": profile.display_name,
        "email": profile.email,
        "photoURL": profile.photo_url,
        "createdAt": profile.created_at.isoformat() if profile.created_at else None,
    }


def _serialize_session(session: VideoSession) -> dict[str, object]:
    return {
        "sessionId": session.id,
        "createdAt": session.created_at.isoformat(),
        "participants": session.participants,
    }
