"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_jwt_secret: str
    supabase_jwt_audience: str = "authenticated"
    stream_api_key: str
    stream_api_secret: str
    stream_base_url: str = "https://video.stream-io-api.com"
    token_ttl_hours: int = 24
    profiles_table: str = "users_"
    sessions_table: str = "videoSessions"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
