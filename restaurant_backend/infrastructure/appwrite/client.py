"""Appwrite client wiring (REST API + httpx, no SDK).

Builds the REST client and the service gateways from Settings. There is
no process-wide client: callers construct one, pass the gateways into the
services they need, and close it when done.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from restaurant_backend.core.config import Settings, get_settings
from restaurant_backend.infrastructure.appwrite._rest_client import AppwriteRESTClient
from restaurant_backend.infrastructure.appwrite.account import AppwriteAccount
from restaurant_backend.infrastructure.appwrite.databases import AppwriteDatabases
from restaurant_backend.infrastructure.appwrite.schema_store import AppwriteSchemaStore
from restaurant_backend.infrastructure.appwrite.storage import AppwriteStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppwriteGateways:
    """REST client plus the Databases / Storage / Account services bound to it."""

    client: AppwriteRESTClient
    databases: AppwriteDatabases
    storage: AppwriteStorage
    account: AppwriteAccount
    schema_store: AppwriteSchemaStore

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AppwriteGateways":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_appwrite(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    use_api_key: bool = True,
) -> AppwriteGateways:
    """Build Appwrite gateways from settings.

    Args:
        settings: Loaded settings; defaults to get_settings().
        http_client: Optional injected httpx client (not closed by aclose()).
        use_api_key: Send X-Appwrite-Key (server access). Set False to act
            only as the logged-in user, as the browser demo did.

    Returns:
        AppwriteGateways; use as an async context manager to close it.
    """
    settings = settings or get_settings()
    api_key = settings.api_key_value() if use_api_key else None
    if use_api_key and api_key is None:
        logger.warning("APPWRITE_API_KEY not set; schema and server calls will be rejected")
    client = AppwriteRESTClient(
        settings.appwrite_endpoint,
        settings.appwrite_project_id,
        api_key=api_key,
        http_client=http_client,
        timeout=settings.request_timeout_seconds,
        self_signed=settings.appwrite_self_signed,
    )
    databases = AppwriteDatabases(client)
    storage = AppwriteStorage(client)
    return AppwriteGateways(
        client=client,
        databases=databases,
        storage=storage,
        account=AppwriteAccount(client),
        schema_store=AppwriteSchemaStore(
            databases,
            storage,
            attribute_wait_seconds=settings.attribute_wait_timeout_seconds,
            poll_interval_seconds=settings.attribute_poll_interval_seconds,
        ),
    )
