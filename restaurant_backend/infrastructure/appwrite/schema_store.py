"""Appwrite-backed schema store (implements ISchemaStore).

Appwrite creates attributes asynchronously: the create call returns with
status 'processing' and indexes over that attribute are rejected until it
is 'available'. create_attribute therefore polls the attribute until it is
usable, so the provisioner can treat every call as complete once awaited.
An attribute that already exists is waited on the same way before the
conflict is re-raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from restaurant_backend.domain.enums import AttributeKind
from restaurant_backend.domain.schema import (
    AttributeSpec,
    BucketSpec,
    IndexSpec,
    PermissionGrant,
)
from restaurant_backend.infrastructure.appwrite.databases import AppwriteDatabases
from restaurant_backend.infrastructure.appwrite.storage import AppwriteStorage
from restaurant_backend.infrastructure.appwrite._rest_client import (
    AppwriteConflictError,
    AppwriteException,
)

logger = logging.getLogger(__name__)


class AttributeNotReadyError(AppwriteException):
    """Raised when an attribute fails or does not become available in time."""


class AppwriteSchemaStore:
    """Schema operations over AppwriteDatabases + AppwriteStorage."""

    _DEFAULT_ATTRIBUTE_WAIT_SECONDS: float = 60.0
    _ATTRIBUTE_POLL_INTERVAL_SECONDS: float = 1.0

    def __init__(
        self,
        databases: AppwriteDatabases,
        storage: AppwriteStorage,
        *,
        attribute_wait_seconds: float = _DEFAULT_ATTRIBUTE_WAIT_SECONDS,
        poll_interval_seconds: float = _ATTRIBUTE_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._databases = databases
        self._storage = storage
        self._attribute_wait_seconds = attribute_wait_seconds
        self._poll_interval_seconds = poll_interval_seconds

    async def create_database(self, database_id: str, name: str) -> dict[str, Any]:
        return await self._databases.create(database_id, name, enabled=True)

    async def get_database(self, database_id: str) -> dict[str, Any]:
        return await self._databases.get(database_id)

    async def create_collection(
        self,
        database_id: str,
        collection_id: str,
        name: str,
        permissions: tuple[PermissionGrant, ...],
        document_security: bool = False,
    ) -> dict[str, Any]:
        return await self._databases.create_collection(
            database_id,
            collection_id,
            name,
            permissions=[grant.render() for grant in permissions],
            document_security=document_security,
            enabled=True,
        )

    async def get_collection(self, database_id: str, collection_id: str) -> dict[str, Any]:
        return await self._databases.get_collection(database_id, collection_id)

    async def create_attribute(
        self, database_id: str, collection_id: str, spec: AttributeSpec
    ) -> dict[str, Any]:
        try:
            created = await self._post_attribute(database_id, collection_id, spec)
        except AppwriteConflictError:
            # A previous run may have left it processing; indexes need it available.
            await self._wait_for_attribute(database_id, collection_id, spec.key)
            raise

        if (created.get("status") or "available") != "available":
            return await self._wait_for_attribute(database_id, collection_id, spec.key)
        return created

    async def _post_attribute(
        self, database_id: str, collection_id: str, spec: AttributeSpec
    ) -> dict[str, Any]:
        # Appwrite rejects a default on a required attribute.
        default = None if spec.required else spec.default
        db = self._databases
        if spec.kind is AttributeKind.STRING:
            created = await db.create_string_attribute(
                database_id, collection_id, spec.key, spec.size, spec.required, default, spec.is_array
            )
        elif spec.kind is AttributeKind.INTEGER:
            created = await db.create_integer_attribute(
                database_id, collection_id, spec.key, spec.required,
                spec.min, spec.max, default, spec.is_array,
            )
        elif spec.kind is AttributeKind.FLOAT:
            created = await db.create_float_attribute(
                database_id, collection_id, spec.key, spec.required,
                spec.min, spec.max, None if default is None else float(default), spec.is_array,
            )
        elif spec.kind is AttributeKind.BOOLEAN:
            created = await db.create_boolean_attribute(
                database_id, collection_id, spec.key, spec.required, default, spec.is_array
            )
        elif spec.kind is AttributeKind.DATETIME:
            created = await db.create_datetime_attribute(
                database_id, collection_id, spec.key, spec.required, default, spec.is_array
            )
        else:
            raise ValueError(f"Unsupported attribute type: {spec.kind!r}")
        return created

    async def _wait_for_attribute(
        self, database_id: str, collection_id: str, key: str
    ) -> dict[str, Any]:
        deadline = time.monotonic() + self._attribute_wait_seconds
        while time.monotonic() < deadline:
            attribute = await self._databases.get_attribute(database_id, collection_id, key)
            status = (attribute.get("status") or "").lower()
            if status == "available":
                return attribute
            if status in ("failed", "stuck"):
                raise AttributeNotReadyError(
                    f"Attribute {key!r} on {collection_id!r} entered status {status}: "
                    f"{attribute.get('error') or 'no details'}"
                )
            logger.debug("Waiting for attribute %s.%s (status=%s)", collection_id, key, status)
            await asyncio.sleep(self._poll_interval_seconds)

        raise AttributeNotReadyError(
            f"Timed out waiting for attribute {key!r} on {collection_id!r} to become available"
        )

    async def create_index(
        self, database_id: str, collection_id: str, spec: IndexSpec
    ) -> dict[str, Any]:
        return await self._databases.create_index(
            database_id,
            collection_id,
            spec.key,
            spec.kind.value,
            list(spec.attribute_keys),
            list(spec.orders),
        )

    async def create_bucket(self, bucket_id: str, spec: BucketSpec) -> dict[str, Any]:
        return await self._storage.create_bucket(
            bucket_id,
            spec.display_name,
            permissions=[grant.render() for grant in spec.permissions],
            file_security=spec.file_security,
            enabled=spec.enabled,
            maximum_file_size=spec.max_file_size,
            allowed_file_extensions=list(spec.allowed_extensions),
            compression=spec.compression,
            encryption=spec.encryption,
            antivirus=spec.antivirus,
        )

    async def get_bucket(self, bucket_id: str) -> dict[str, Any]:
        return await self._storage.get_bucket(bucket_id)
