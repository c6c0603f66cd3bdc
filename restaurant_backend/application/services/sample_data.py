"""Sample data for the demo: four categories and one menu item in each.

Rows are always inserted with fresh ids; there is no check for existing
rows, so every run adds another four categories and four menu items.
"""

from __future__ import annotations

import logging
from typing import Any

from restaurant_backend.application.dtos.seed import SeedResult
from restaurant_backend.application.interfaces.stores import IDocumentStore
from restaurant_backend.domain.exceptions import RemoteStoreException
from restaurant_backend.infrastructure.appwrite.collections import (
    COLLECTION_CATEGORIES,
    COLLECTION_MENU_ITEMS,
)
from restaurant_backend.shared.utils.datetime import iso_now
from restaurant_backend.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES: tuple[dict[str, Any], ...] = (
    {
        "name": "Appetizers",
        "description": "Start your meal with our delicious appetizers",
        "sortOrder": 1,
    },
    {
        "name": "Seafood Specialties",
        "description": "Fresh seafood dishes with authentic Khmer flavors",
        "sortOrder": 2,
    },
    {
        "name": "Traditional Khmer",
        "description": "Classic Cambodian dishes prepared with love",
        "sortOrder": 3,
    },
    {
        "name": "Beverages",
        "description": "Refreshing drinks and traditional beverages",
        "sortOrder": 4,
    },
)

# category_index points into SAMPLE_CATEGORIES.
SAMPLE_MENU_ITEMS: tuple[dict[str, Any], ...] = (
    {
        "category_index": 0,
        "name": "Fresh Spring Rolls",
        "description": "Vietnamese-style spring rolls with shrimp and fresh herbs",
        "price": 8.90,
        "isSpicy": False,
        "isVegetarian": False,
        "prepTime": 10,
        "calories": 180,
    },
    {
        "category_index": 1,
        "name": "Grilled Barramundi",
        "description": "Grilled barramundi with lemongrass and Khmer spices",
        "price": 24.90,
        "isSpicy": True,
        "isVegetarian": False,
        "prepTime": 25,
        "calories": 320,
    },
    {
        "category_index": 2,
        "name": "Amok Fish",
        "description": "Traditional Cambodian fish curry steamed in banana leaves",
        "price": 19.90,
        "isSpicy": True,
        "isVegetarian": False,
        "prepTime": 30,
        "calories": 280,
    },
    {
        "category_index": 3,
        "name": "Iced Coffee",
        "description": "Strong Cambodian coffee served with condensed milk over ice",
        "price": 4.50,
        "isSpicy": False,
        "isVegetarian": True,
        "prepTime": 5,
        "calories": 120,
    },
)


class SampleDataLoader:
    """Inserts the demo categories and menu items into a provisioned database."""

    def __init__(self, documents: IDocumentStore, database_id: str) -> None:
        self._documents = documents
        self._database_id = database_id

    async def seed(self) -> SeedResult:
        """Insert categories then menu items; failures are logged and reported, not raised."""
        logger.info("Seeding sample data into %s", self._database_id)
        category_ids: list[str] = []
        menu_item_ids: list[str] = []
        try:
            for category in SAMPLE_CATEGORIES:
                now = iso_now()
                created = await self._documents.create_document(
                    self._database_id,
                    COLLECTION_CATEGORIES,
                    generate_cuid(),
                    {**category, "isActive": True, "createdAt": now, "updatedAt": now},
                )
                category_ids.append(created["$id"])
                logger.info("Category created: %s", category["name"])

            for item in SAMPLE_MENU_ITEMS:
                now = iso_now()
                data = {k: v for k, v in item.items() if k != "category_index"}
                data.update(
                    categoryId=category_ids[item["category_index"]],
                    isAvailable=True,
                    sortOrder=1,
                    createdAt=now,
                    updatedAt=now,
                )
                created = await self._documents.create_document(
                    self._database_id, COLLECTION_MENU_ITEMS, generate_cuid(), data
                )
                menu_item_ids.append(created["$id"])
                logger.info("Menu item created: %s", item["name"])
        except RemoteStoreException as exc:
            logger.error("Error seeding sample data: %s", exc)
            return SeedResult(
                success=False,
                category_ids=category_ids,
                menu_item_ids=menu_item_ids,
                error=str(exc),
            )

        logger.info(
            "Sample data seeded: %d categories, %d menu items",
            len(category_ids),
            len(menu_item_ids),
        )
        return SeedResult(success=True, category_ids=category_ids, menu_item_ids=menu_item_ids)
