"""Stream video directory client: user tokens and user registration."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

import httpx
import jwt


class DirectoryClient(Protocol):
    """Interface for the external identity/token directory."""

    def create_token(
        self, user_id: str, issued_at: datetime, expires_at: datetime
    ) -> str:
        """Mint a token bound to a single user."""

    async def upsert_user(self, user_id: str, name: str, image: str | None) -> None:
        """Register the user or update their directory record."""


@dataclass
class HttpxStreamDirectoryClient(DirectoryClient):
    """Stream client; tokens are signed locally, users go over REST."""

    api_key: str
    api_secret: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, api_secret: str, base_url: str
    ) -> "HttpxStreamDirectoryClient":
        """Create a directory client with a managed httpx session."""
        return cls(
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    def create_token(
        self, user_id: str, issued_at: datetime, expires_at: datetime
    ) -> str:
        """Sign a user token with the API secret."""
        payload = {
            "user_id": user_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self.api_secret, algorithm="HS256")

    async def upsert_user(self, user_id: str, name: str, image: str | None) -> None:
        """Create or update a user through the users endpoint."""
        user: dict[str, object] = {"id": user_id, "name": name}
        if image:
            user["image"] = image
        response = await self.http_client.post(
            f"{self.base_url}/api/v2/users",
            params={"api_key": self.api_key},
            headers={
                "Authorization": self._server_token(),
                "stream-auth-type": "jwt",
            },
            json={"users": {user_id: user}},
            timeout=10,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    def _server_token(self) -> str:
        return jwt.encode({"server": True}, self.api_secret, algorithm="HS256")
