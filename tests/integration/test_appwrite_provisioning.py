"""End-to-end provisioning through the Appwrite REST gateways against an emulated server."""

import httpx
import pytest

from restaurant_backend.application.services.sample_data import SampleDataLoader
from restaurant_backend.application.services.schema_provisioner import SchemaProvisioner
from restaurant_backend.domain.enums import ProvisioningOutcome, SchemaObjectKind
from restaurant_backend.infrastructure.appwrite import create_appwrite
from tests.integration.appwrite_emulator import AppwriteEmulator


@pytest.fixture
def emulator() -> AppwriteEmulator:
    return AppwriteEmulator(polls_until_available=2)


@pytest.fixture
async def appwrite(settings, emulator):
    http = httpx.AsyncClient(transport=emulator.transport())
    async with create_appwrite(settings, http_client=http) as gateways:
        yield gateways
    await http.aclose()


async def test_fresh_then_repeat(appwrite, emulator, restaurant_schema) -> None:
    provisioner = SchemaProvisioner(appwrite.schema_store)

    first = await provisioner.provision(restaurant_schema)
    assert first.success, first.failed()
    assert first.count(SchemaObjectKind.ATTRIBUTE, ProvisioningOutcome.CREATED) == 56
    assert first.count(SchemaObjectKind.INDEX, ProvisioningOutcome.CREATED) == 17
    assert all(
        a["status"] == "available"
        for attrs in emulator.attributes.values()
        for a in attrs.values()
    )

    second = await provisioner.provision(restaurant_schema)
    assert second.success
    assert {r.outcome for r in second.results} == {ProvisioningOutcome.ALREADY_EXISTS}
    assert len(second.results) == len(first.results)


async def test_permissions_and_required_defaults(appwrite, emulator, restaurant_schema) -> None:
    await SchemaProvisioner(appwrite.schema_store).provision(restaurant_schema)

    users = emulator.collections[("restaurant-db", "users")]
    assert users["$permissions"] == [
        'read("any")',
        'create("users")',
        'update("users")',
        'delete("users")',
    ]
    role = emulator.attributes[("restaurant-db", "users")]["role"]
    assert role["required"] is True
    assert role["default"] is None
    tip = emulator.attributes[("restaurant-db", "orders")]["tip"]
    assert tip["default"] == 0.0
    documents_bucket = emulator.buckets["documents"]
    assert documents_bucket["maximumFileSize"] == 50_000_000
    assert documents_bucket["permissions"][0] == 'read("users")'


async def test_failed_attribute_stops_collection(appwrite, emulator, restaurant_schema) -> None:
    emulator.failing_attributes.add("price")

    report = await SchemaProvisioner(appwrite.schema_store).provision(restaurant_schema)

    failed = report.failed()
    assert [r.qualified_id for r in failed] == ["menuItems.price"]
    assert "failed" in failed[0].reason
    assert emulator.indexes[("restaurant-db", "menuItems")] == {}
    assert len(emulator.indexes[("restaurant-db", "orderItems")]) == 3


async def test_seed_after_provisioning(appwrite, emulator, restaurant_schema) -> None:
    await SchemaProvisioner(appwrite.schema_store).provision(restaurant_schema)

    result = await SampleDataLoader(appwrite.databases, "restaurant-db").seed()

    assert result.success
    assert len(emulator.documents[("restaurant-db", "menuItems")]) == 4


async def test_seed_without_schema_reports_failure(appwrite) -> None:
    result = await SampleDataLoader(appwrite.databases, "restaurant-db").seed()
    assert not result.success
    assert "could not be found" in result.error


async def test_rerun_waits_for_attribute_left_processing(appwrite, emulator, restaurant_schema) -> None:
    provisioner = SchemaProvisioner(appwrite.schema_store)
    await provisioner.provision(restaurant_schema)
    menu_items = ("restaurant-db", "menuItems")
    emulator.attributes[menu_items]["price"].update(status="processing", _polls=0)
    emulator.indexes[menu_items].clear()
    emulator.requests.clear()

    report = await provisioner.provision(restaurant_schema)

    assert report.success, report.failed()
    price = next(r for r in report.results if r.qualified_id == "menuItems.price")
    assert price.outcome is ProvisioningOutcome.ALREADY_EXISTS
    assert emulator.attributes[menu_items]["price"]["status"] == "available"
    assert set(emulator.indexes[menu_items]) == {
        "category_index",
        "price_index",
        "available_index",
        "sort_index",
    }
    assert any(
        r.method == "GET" and r.url.path.endswith("/collections/menuItems/attributes/price")
        for r in emulator.requests
    )


async def test_second_seed_stops_at_unique_category_name(appwrite, emulator, restaurant_schema) -> None:
    await SchemaProvisioner(appwrite.schema_store).provision(restaurant_schema)
    loader = SampleDataLoader(appwrite.databases, "restaurant-db")

    first = await loader.seed()
    second = await loader.seed()

    assert first.success
    assert not second.success
    assert second.categories_created == 0
    assert "already exists" in second.error
    assert len(emulator.documents[("restaurant-db", "categories")]) == 4
    assert len(emulator.documents[("restaurant-db", "menuItems")]) == 4
