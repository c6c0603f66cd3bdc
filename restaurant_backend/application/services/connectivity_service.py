"""Backend connectivity checks: ping, auth, database, menu items, categories.

Each check produces a CheckResult instead of raising, so a caller can show
all of them at once. Missing collections on a fresh project are reported as
warnings, not errors.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from restaurant_backend.application.dtos.connectivity import CheckResult
from restaurant_backend.application.interfaces.stores import IDocumentStore
from restaurant_backend.application.services.auth_service import AuthService
from restaurant_backend.application.services.menu_service import MenuService
from restaurant_backend.domain.enums import CheckStatus
from restaurant_backend.domain.exceptions import RemoteStoreException, ServiceException
from restaurant_backend.infrastructure.appwrite.collections import COLLECTION_MENU_ITEMS

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Database or collection not found - this is expected for a new project"


class ConnectivityService:
    """Runs the checks in a fixed order and returns one CheckResult per check."""

    def __init__(
        self,
        ping: Callable[[], Awaitable[str]],
        auth: AuthService,
        documents: IDocumentStore,
        menu: MenuService,
        database_id: str,
    ) -> None:
        self._ping = ping
        self._auth = auth
        self._documents = documents
        self._menu = menu
        self._database_id = database_id

    async def run_all(self) -> list[CheckResult]:
        results = [
            await self.check_ping(),
            await self.check_auth(),
            await self.check_database(),
            await self.check_menu_items(),
            await self.check_categories(),
        ]
        for result in results:
            log = logger.error if result.status is CheckStatus.ERROR else logger.info
            log("Connectivity check %s: %s - %s", result.name, result.status.value, result.message)
        return results

    async def check_ping(self) -> CheckResult:
        try:
            reply = await self._ping()
        except RemoteStoreException as exc:
            return CheckResult("ping", CheckStatus.ERROR, f"Ping failed: {exc.message}")
        return CheckResult("ping", CheckStatus.SUCCESS, f"Backend reachable ({reply.strip() or 'ok'})")

    async def check_auth(self) -> CheckResult:
        user = await self._auth.get_current_user()
        if user is None:
            return CheckResult("auth", CheckStatus.WARNING, "No user logged in")
        return CheckResult(
            "auth",
            CheckStatus.SUCCESS,
            f"Logged in as {user.get('name') or user.get('email') or user.get('$id')}",
        )

    async def check_database(self) -> CheckResult:
        try:
            listing = await self._documents.list_documents(
                self._database_id, COLLECTION_MENU_ITEMS
            )
        except RemoteStoreException as exc:
            if exc.code == 404:
                return CheckResult("database", CheckStatus.WARNING, NOT_FOUND_MESSAGE)
            return CheckResult("database", CheckStatus.ERROR, f"Database error: {exc.message}")
        total = int(listing.get("total", 0))
        return CheckResult(
            "database", CheckStatus.SUCCESS, f"Database reachable ({total} menu items)", total
        )

    async def check_menu_items(self) -> CheckResult:
        try:
            items = await self._menu.get_menu_items()
        except ServiceException as exc:
            return CheckResult("menu_items", CheckStatus.WARNING, f"Menu service: {exc.message}")
        total = int(items.get("total", 0))
        return CheckResult("menu_items", CheckStatus.SUCCESS, f"Loaded {total} menu items", total)

    async def check_categories(self) -> CheckResult:
        try:
            categories = await self._menu.get_categories()
        except ServiceException as exc:
            return CheckResult("categories", CheckStatus.WARNING, f"Category service: {exc.message}")
        total = int(categories.get("total", 0))
        return CheckResult("categories", CheckStatus.SUCCESS, f"Loaded {total} categories", total)
