"""Appwrite Account API (current user and sessions); implements IAccountGateway.

Session secrets returned by create_email_password_session are attached
to the REST client so later account calls act as that user.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from restaurant_backend.infrastructure.appwrite._rest_client import AppwriteRESTClient


class AppwriteAccount:
    """Account service bound to one REST client."""

    def __init__(self, client: AppwriteRESTClient) -> None:
        self._client = client

    async def get(self) -> dict[str, Any]:
        return await self._client.call("GET", "/account")

    async def create(
        self, user_id: str, email: str, password: str, name: str | None = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"userId": user_id, "email": email, "password": password}
        if name:
            body["name"] = name
        return await self._client.call("POST", "/account", body=body)

    async def create_email_password_session(self, email: str, password: str) -> dict[str, Any]:
        session = await self._client.call(
            "POST", "/account/sessions/email", body={"email": email, "password": password}
        )
        secret = session.get("secret")
        if secret:
            self._client.set_session(secret)
        return session

    async def delete_session(self, session_id: str = "current") -> None:
        await self._client.call("DELETE", f"/account/sessions/{quote(session_id, safe='')}")
        if session_id == "current":
            self._client.set_session(None)
