"""Menu service: categories and menu items, with optional image upload."""

from __future__ import annotations

import logging
from typing import Any

from restaurant_backend.application.dtos.menu import ImageUpload
from restaurant_backend.application.interfaces.stores import IDocumentStore, IFileStore
from restaurant_backend.domain.exceptions import (
    RemoteStoreException,
    ResourceNotFoundException,
    ServiceException,
)
from restaurant_backend.infrastructure.appwrite.collections import (
    BUCKET_IMAGES,
    COLLECTION_CATEGORIES,
    COLLECTION_MENU_ITEMS,
)
from restaurant_backend.infrastructure.appwrite.queries import Query
from restaurant_backend.shared.utils.datetime import iso_now
from restaurant_backend.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


def _wrap(exc: RemoteStoreException, fallback: str, operation: str) -> ServiceException:
    return ServiceException(exc.message or fallback, operation)


class MenuService:
    """Reads and writes the categories and menuItems collections."""

    def __init__(
        self,
        documents: IDocumentStore,
        files: IFileStore,
        database_id: str,
    ) -> None:
        self._documents = documents
        self._files = files
        self._database_id = database_id

    async def get_categories(self) -> dict[str, Any]:
        """Active categories ordered by sortOrder."""
        try:
            return await self._documents.list_documents(
                self._database_id,
                COLLECTION_CATEGORIES,
                [Query.equal("isActive", True), Query.order_asc("sortOrder")],
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Failed to fetch categories", "get_categories") from exc

    async def get_menu_items(self, category_id: str | None = None) -> dict[str, Any]:
        """Available menu items, optionally limited to one category."""
        queries = [Query.equal("isAvailable", True)]
        if category_id:
            queries.append(Query.equal("categoryId", category_id))
        try:
            return await self._documents.list_documents(
                self._database_id, COLLECTION_MENU_ITEMS, queries
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Failed to fetch menu items", "get_menu_items") from exc

    async def get_menu_item_by_id(self, item_id: str) -> dict[str, Any]:
        try:
            return await self._documents.get_document(
                self._database_id, COLLECTION_MENU_ITEMS, item_id
            )
        except RemoteStoreException as exc:
            if exc.code == 404:
                raise ResourceNotFoundException("menu_item", item_id) from exc
            raise _wrap(exc, "Failed to fetch menu item", "get_menu_item_by_id") from exc

    async def _upload_image(self, image: ImageUpload) -> str:
        uploaded = await self._files.create_file(
            BUCKET_IMAGES,
            generate_cuid(),
            image.filename,
            image.content,
            image.content_type,
        )
        return self.get_image_url(uploaded["$id"])

    async def create_menu_item(
        self, item_data: dict[str, Any], image: ImageUpload | None = None
    ) -> dict[str, Any]:
        """Create a menu item; when image is given it is uploaded first and its preview URL stored."""
        try:
            data = dict(item_data)
            if image is not None:
                data["image"] = await self._upload_image(image)
            now = iso_now()
            data.setdefault("createdAt", now)
            data.setdefault("updatedAt", now)
            return await self._documents.create_document(
                self._database_id, COLLECTION_MENU_ITEMS, generate_cuid(), data
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Failed to create menu item", "create_menu_item") from exc

    async def update_menu_item(
        self,
        item_id: str,
        item_data: dict[str, Any],
        image: ImageUpload | None = None,
    ) -> dict[str, Any]:
        try:
            data = dict(item_data)
            if image is not None:
                data["image"] = await self._upload_image(image)
            data["updatedAt"] = iso_now()
            return await self._documents.update_document(
                self._database_id, COLLECTION_MENU_ITEMS, item_id, data
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Failed to update menu item", "update_menu_item") from exc

    async def delete_menu_item(self, item_id: str) -> None:
        try:
            await self._documents.delete_document(
                self._database_id, COLLECTION_MENU_ITEMS, item_id
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Failed to delete menu item", "delete_menu_item") from exc

    def get_image_url(self, file_id: str, width: int = 400, height: int = 300) -> str:
        return self._files.get_file_preview_url(BUCKET_IMAGES, file_id, width, height)

    async def search_menu_items(self, search_term: str) -> dict[str, Any]:
        """Full-text search on name among available items (needs a fulltext index on name)."""
        try:
            return await self._documents.list_documents(
                self._database_id,
                COLLECTION_MENU_ITEMS,
                [Query.search("name", search_term), Query.equal("isAvailable", True)],
            )
        except RemoteStoreException as exc:
            raise _wrap(exc, "Search failed", "search_menu_items") from exc
