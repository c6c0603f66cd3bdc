"""Appwrite Databases API (databases, collections, attributes, indexes, documents).

Method names follow the Appwrite SDK so call sites read the same as the
JavaScript client; implements IDocumentStore.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from restaurant_backend.infrastructure.appwrite._rest_client import AppwriteRESTClient


def _seg(value: str) -> str:
    return quote(value, safe="")


class AppwriteDatabases:
    """Databases service bound to one REST client."""

    def __init__(self, client: AppwriteRESTClient) -> None:
        self._client = client

    # -----------------
    # Databases
    # -----------------

    async def list(self) -> dict[str, Any]:
        return await self._client.call("GET", "/databases")

    async def create(self, database_id: str, name: str, enabled: bool = True) -> dict[str, Any]:
        return await self._client.call(
            "POST",
            "/databases",
            body={"databaseId": database_id, "name": name, "enabled": enabled},
        )

    async def get(self, database_id: str) -> dict[str, Any]:
        return await self._client.call("GET", f"/databases/{_seg(database_id)}")

    # -----------------
    # Collections
    # -----------------

    def _collections(self, database_id: str) -> str:
        return f"/databases/{_seg(database_id)}/collections"

    def _collection(self, database_id: str, collection_id: str) -> str:
        return f"{self._collections(database_id)}/{_seg(collection_id)}"

    async def create_collection(
        self,
        database_id: str,
        collection_id: str,
        name: str,
        permissions: list[str] | None = None,
        document_security: bool = False,
        enabled: bool = True,
    ) -> dict[str, Any]:
        return await self._client.call(
            "POST",
            self._collections(database_id),
            body={
                "collectionId": collection_id,
                "name": name,
                "permissions": permissions or [],
                "documentSecurity": document_security,
                "enabled": enabled,
            },
        )

    async def get_collection(self, database_id: str, collection_id: str) -> dict[str, Any]:
        return await self._client.call("GET", self._collection(database_id, collection_id))

    # -----------------
    # Attributes
    # -----------------

    async def _create_attribute(
        self, database_id: str, collection_id: str, kind: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        path = f"{self._collection(database_id, collection_id)}/attributes/{kind}"
        return await self._client.call("POST", path, body=body)

    async def create_string_attribute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        size: int,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            database_id,
            collection_id,
            "string",
            {"key": key, "size": size, "required": required, "default": default, "array": array},
        )

    async def create_integer_attribute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        required: bool,
        min: int | None = None,
        max: int | None = None,
        default: int | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"key": key, "required": required, "default": default, "array": array}
        if min is not None:
            body["min"] = min
        if max is not None:
            body["max"] = max
        return await self._create_attribute(database_id, collection_id, "integer", body)

    async def create_float_attribute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        required: bool,
        min: float | None = None,
        max: float | None = None,
        default: float | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"key": key, "required": required, "default": default, "array": array}
        if min is not None:
            body["min"] = min
        if max is not None:
            body["max"] = max
        return await self._create_attribute(database_id, collection_id, "float", body)

    async def create_boolean_attribute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        required: bool,
        default: bool | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            database_id,
            collection_id,
            "boolean",
            {"key": key, "required": required, "default": default, "array": array},
        )

    async def create_datetime_attribute(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        required: bool,
        default: str | None = None,
        array: bool = False,
    ) -> dict[str, Any]:
        return await self._create_attribute(
            database_id,
            collection_id,
            "datetime",
            {"key": key, "required": required, "default": default, "array": array},
        )

    async def get_attribute(self, database_id: str, collection_id: str, key: str) -> dict[str, Any]:
        path = f"{self._collection(database_id, collection_id)}/attributes/{_seg(key)}"
        return await self._client.call("GET", path)

    # -----------------
    # Indexes
    # -----------------

    async def create_index(
        self,
        database_id: str,
        collection_id: str,
        key: str,
        type: str,
        attributes: list[str],
        orders: list[str] | None = None,
    ) -> dict[str, Any]:
        return await self._client.call(
            "POST",
            f"{self._collection(database_id, collection_id)}/indexes",
            body={"key": key, "type": type, "attributes": attributes, "orders": orders or []},
        )

    # -----------------
    # Documents
    # -----------------

    def _documents(self, database_id: str, collection_id: str) -> str:
        return f"{self._collection(database_id, collection_id)}/documents"

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
        permissions: list[str] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"documentId": document_id, "data": data}
        if permissions is not None:
            body["permissions"] = permissions
        return await self._client.call(
            "POST", self._documents(database_id, collection_id), body=body
        )

    async def get_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> dict[str, Any]:
        return await self._client.call(
            "GET", f"{self._documents(database_id, collection_id)}/{_seg(document_id)}"
        )

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: list[str] | None = None,
    ) -> dict[str, Any]:
        params = {"queries[]": queries} if queries else None
        return await self._client.call(
            "GET", self._documents(database_id, collection_id), params=params
        )

    async def update_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        return await self._client.call(
            "PATCH",
            f"{self._documents(database_id, collection_id)}/{_seg(document_id)}",
            body={"data": data},
        )

    async def delete_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> None:
        await self._client.call(
            "DELETE", f"{self._documents(database_id, collection_id)}/{_seg(document_id)}"
        )
