"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from video_call_api.adapters.stream_directory_client import HttpxStreamDirectoryClient
from video_call_api.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from video_call_api.adapters.supabase_token_verifier import SupabaseTokenVerifier
from video_call_api.adapters.supabase_video_session_repository import (
    SupabaseVideoSessionRepository,
)
from video_call_api.config import Settings
from video_call_api.services.authorization import AuthorizationPolicy
from video_call_api.services.identity import TokenVerifier
from video_call_api.services.profiles import ProfileService
from video_call_api.services.sessions import VideoSessionService
from video_call_api.services.tokens import TokenService


@dataclass
class AppContainer:
    """Holds process-wide clients and the services built on them."""

    settings: Settings
    token_verifier: TokenVerifier
    token_service: TokenService
    profile_service: ProfileService
    video_session_service: VideoSessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, table=resolved_settings.profiles_table
    )
    session_repository = SupabaseVideoSessionRepository(
        supabase_client, table=resolved_settings.sessions_table
    )
    directory_client = HttpxStreamDirectoryClient.create(
        api_key=resolved_settings.stream_api_key,
        api_secret=resolved_settings.stream_api_secret,
        base_url=resolved_settings.stream_base_url,
    )
    token_service = TokenService(
        directory=directory_client,
        ttl=timedelta(hours=resolved_settings.token_ttl_hours),
    )
    profile_service = ProfileService(
        repository=profile_repository,
        directory=directory_client,
        policy=AuthorizationPolicy(profile_repository),
    )
    video_session_service = VideoSessionService(session_repository)
    token_verifier = SupabaseTokenVerifier(
        jwt_secret=resolved_settings.supabase_jwt_secret,
        audience=resolved_settings.supabase_jwt_audience,
    )

    async def close_resources() -> None:
        await directory_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_verifier=token_verifier,
        token_service=token_service,
        profile_service=profile_service,
        video_session_service=video_session_service,
        close_resources=close_resources,
    )
