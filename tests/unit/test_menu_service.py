"""Tests for MenuService (in-memory document and file stores)."""

import pytest

from restaurant_backend.application.dtos.menu import ImageUpload
from restaurant_backend.application.services.menu_service import MenuService
from restaurant_backend.application.services.sample_data import SampleDataLoader
from restaurant_backend.domain.exceptions import (
    RemoteStoreException,
    ResourceNotFoundException,
    ServiceException,
)
from restaurant_backend.infrastructure.appwrite.queries import parse_query


@pytest.fixture
def menu(document_store, file_store) -> MenuService:
    return MenuService(document_store, file_store, "restaurant-db")


@pytest.fixture
async def seeded(document_store) -> None:
    await SampleDataLoader(document_store, "restaurant-db").seed()


async def test_categories_active_and_sorted(menu, document_store, seeded) -> None:
    first = document_store.documents("categories")[0]
    first["isActive"] = False

    result = await menu.get_categories()

    names = [c["name"] for c in result["documents"]]
    assert names == ["Seafood Specialties", "Traditional Khmer", "Beverages"]
    queries = [parse_query(q) for q in document_store.calls[-1][2]]
    assert {"method": "orderAsc", "attribute": "sortOrder"} in queries


async def test_menu_items_filtered_by_category(menu, document_store, seeded) -> None:
    categories = document_store.documents("categories")
    beverages = next(c for c in categories if c["name"] == "Beverages")

    result = await menu.get_menu_items(beverages["$id"])

    assert [i["name"] for i in result["documents"]] == ["Iced Coffee"]


async def test_unavailable_items_hidden(menu, document_store, seeded) -> None:
    document_store.documents("menuItems")[0]["isAvailable"] = False
    result = await menu.get_menu_items()
    assert result["total"] == 3


async def test_create_menu_item_with_image(menu, file_store, document_store) -> None:
    created = await menu.create_menu_item(
        {"name": "Lok Lak", "price": 12.5, "categoryId": "c1"},
        ImageUpload("loklak.jpg", b"\xff\xd8", "image/jpeg"),
    )

    (file_id,) = file_store.files
    assert file_store.files[file_id]["bucket_id"] == "images"
    assert created["image"] == menu.get_image_url(file_id)
    assert created["createdAt"] == created["updatedAt"]


async def test_update_and_delete(menu, document_store, seeded) -> None:
    item = document_store.documents("menuItems")[0]

    updated = await menu.update_menu_item(item["$id"], {"price": 9.9})
    assert updated["price"] == 9.9
    await menu.delete_menu_item(item["$id"])

    with pytest.raises(ResourceNotFoundException) as exc_info:
        await menu.get_menu_item_by_id(item["$id"])
    assert exc_info.value.error_code == "RESOURCE_NOT_FOUND"


async def test_search_matches_name(menu, seeded) -> None:
    result = await menu.search_menu_items("amok")
    assert [i["name"] for i in result["documents"]] == ["Amok Fish"]


async def test_errors_wrapped_with_fallback(menu, document_store) -> None:
    document_store.error = RemoteStoreException("", 500)
    with pytest.raises(ServiceException) as exc_info:
        await menu.get_categories()
    assert exc_info.value.message == "Failed to fetch categories"
    assert exc_info.value.details["operation"] == "get_categories"
