"""Authentication service: account, session, and user profile operations.

AuthStateWatcher replaces a hidden interval timer with an explicit,
caller-owned polling loop: the caller chooses the period, starts it, and
stops it.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from restaurant_backend.application.interfaces.stores import IAccountGateway, IDocumentStore
from restaurant_backend.domain.exceptions import (
    AuthenticationException,
    RemoteStoreException,
    ServiceException,
)
from restaurant_backend.infrastructure.appwrite.collections import COLLECTION_USERS
from restaurant_backend.shared.utils.datetime import iso_now
from restaurant_backend.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

AuthCallback = Callable[[dict[str, Any] | None], Awaitable[None] | None]


class AuthService:
    """Login / registration / logout for the current user, plus the users profile document."""

    def __init__(
        self,
        account: IAccountGateway,
        documents: IDocumentStore,
        database_id: str,
    ) -> None:
        self._account = account
        self._documents = documents
        self._database_id = database_id

    async def get_current_user(self) -> dict[str, Any] | None:
        """Return the logged-in account, or None when there is no valid session."""
        try:
            return await self._account.get()
        except RemoteStoreException as exc:
            logger.debug("No current user: %s", exc)
            return None

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Create an email/password session and return it."""
        try:
            return await self._account.create_email_password_session(email, password)
        except RemoteStoreException as exc:
            raise AuthenticationException(exc.message or "Login failed") from exc

    async def register(self, email: str, password: str, name: str) -> dict[str, Any] | None:
        """Create the account, log in, and create the users profile document.

        A failed profile write is logged and ignored (the users collection may
        not be provisioned yet); account or login failures raise.
        """
        user_id = generate_cuid()
        try:
            await self._account.create(user_id, email, password, name)
        except RemoteStoreException as exc:
            raise AuthenticationException(exc.message or "Registration failed") from exc

        await self.login(email, password)

        now = iso_now()
        try:
            await self._documents.create_document(
                self._database_id,
                COLLECTION_USERS,
                user_id,
                {
                    "email": email,
                    "name": name,
                    "role": "customer",
                    "status": "active",
                    "createdAt": now,
                    "updatedAt": now,
                },
            )
        except RemoteStoreException as exc:
            logger.warning(
                "User profile creation failed (collection may not exist): %s", exc
            )

        return await self.get_current_user()

    async def logout(self) -> None:
        """Delete the current session."""
        try:
            await self._account.delete_session("current")
        except RemoteStoreException as exc:
            raise AuthenticationException(exc.message or "Logout failed") from exc

    async def update_profile(self, user_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Patch the users profile document."""
        try:
            return await self._documents.update_document(
                self._database_id,
                COLLECTION_USERS,
                user_id,
                {**data, "updatedAt": iso_now()},
            )
        except RemoteStoreException as exc:
            raise ServiceException(
                exc.message or "Profile update failed", "update_profile"
            ) from exc

    def on_auth_state_change(
        self, callback: AuthCallback, interval_seconds: float = 30.0
    ) -> "AuthStateWatcher":
        """Start polling the auth state; call stop() on the returned watcher to unsubscribe."""
        return AuthStateWatcher(self, callback, interval_seconds).start()


class AuthStateWatcher:
    """Polls AuthService.get_current_user and reports the result to a callback.

    The callback receives the account dict or None immediately on start and
    then once per interval until stop() is awaited.
    """

    def __init__(
        self,
        auth: AuthService,
        callback: AuthCallback,
        interval_seconds: float = 30.0,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._auth = auth
        self._callback = callback
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "AuthStateWatcher":
        """Start the polling task on the running event loop."""
        if self.running:
            raise RuntimeError("AuthStateWatcher is already running")
        self._task = asyncio.create_task(self._run(), name="auth-state-watcher")
        return self

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "AuthStateWatcher":
        return self.start()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _run(self) -> None:
        while True:
            user = await self._auth.get_current_user()
            try:
                result = self._callback(user)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Auth state callback failed")
            await asyncio.sleep(self._interval_seconds)
