"""Tests for AppwriteSchemaStore (mocked Databases / Storage services)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from restaurant_backend.application.services.restaurant_schema import DOCUMENTS
from restaurant_backend.domain.enums import AttributeKind, IndexKind
from restaurant_backend.domain.schema import AttributeSpec, IndexSpec, grants
from restaurant_backend.infrastructure.appwrite import AppwriteConflictError
from restaurant_backend.infrastructure.appwrite.schema_store import (
    AppwriteSchemaStore,
    AttributeNotReadyError,
)


@pytest.fixture
def databases() -> MagicMock:
    databases = MagicMock()
    for name in (
        "create_string_attribute",
        "create_integer_attribute",
        "create_float_attribute",
        "create_boolean_attribute",
        "create_datetime_attribute",
    ):
        setattr(databases, name, AsyncMock(return_value={"status": "available"}))
    databases.get_attribute = AsyncMock(return_value={"status": "available"})
    databases.create_index = AsyncMock(return_value={})
    databases.create_collection = AsyncMock(return_value={})
    return databases


@pytest.fixture
def storage() -> MagicMock:
    storage = MagicMock()
    storage.create_bucket = AsyncMock(return_value={})
    return storage


@pytest.fixture
def store(databases, storage) -> AppwriteSchemaStore:
    return AppwriteSchemaStore(
        databases, storage, attribute_wait_seconds=0.2, poll_interval_seconds=0.01
    )


async def test_required_attribute_drops_default(store, databases) -> None:
    spec = AttributeSpec("status", AttributeKind.STRING, required=True, size=20, default="pending")
    await store.create_attribute("db", "orders", spec)
    databases.create_string_attribute.assert_awaited_once_with(
        "db", "orders", "status", 20, True, None, False
    )


async def test_optional_float_default_sent_as_float(store, databases) -> None:
    await store.create_attribute("db", "orders", AttributeSpec("tip", AttributeKind.FLOAT, default=0))
    args = databases.create_float_attribute.await_args.args
    assert args[6] == 0.0
    assert isinstance(args[6], float)


async def test_optional_boolean_false_default_kept(store, databases) -> None:
    await store.create_attribute(
        "db", "menuItems", AttributeSpec("isSpicy", AttributeKind.BOOLEAN, default=False)
    )
    args = databases.create_boolean_attribute.await_args.args
    assert args[4] is False


async def test_waits_until_available(store, databases) -> None:
    databases.create_integer_attribute.return_value = {"status": "processing"}
    databases.get_attribute.side_effect = [
        {"status": "processing"},
        {"status": "available", "key": "qty"},
    ]
    result = await store.create_attribute("db", "orderItems", AttributeSpec("qty", AttributeKind.INTEGER))
    assert result["key"] == "qty"
    assert databases.get_attribute.await_count == 2


async def test_existing_attribute_waited_on_before_conflict(store, databases) -> None:
    databases.create_string_attribute.side_effect = AppwriteConflictError(
        "Attribute already exists", 409, "attribute_already_exists"
    )
    databases.get_attribute.side_effect = [
        {"status": "processing"},
        {"status": "available"},
    ]
    with pytest.raises(AppwriteConflictError):
        await store.create_attribute("db", "menuItems", AttributeSpec("name", AttributeKind.STRING, size=100))
    assert databases.get_attribute.await_count == 2
    databases.get_attribute.assert_awaited_with("db", "menuItems", "name")


async def test_existing_attribute_that_failed_raises_not_ready(store, databases) -> None:
    databases.create_string_attribute.side_effect = AppwriteConflictError("exists", 409)
    databases.get_attribute.return_value = {"status": "failed"}
    with pytest.raises(AttributeNotReadyError):
        await store.create_attribute("db", "menuItems", AttributeSpec("name", AttributeKind.STRING, size=100))


async def test_stuck_attribute_raises(store, databases) -> None:
    databases.create_datetime_attribute.return_value = {"status": "processing"}
    databases.get_attribute.return_value = {"status": "stuck"}
    with pytest.raises(AttributeNotReadyError, match="stuck"):
        await store.create_attribute("db", "orders", AttributeSpec("at", AttributeKind.DATETIME))


async def test_wait_times_out(store, databases) -> None:
    databases.create_integer_attribute.return_value = {"status": "processing"}
    databases.get_attribute.return_value = {"status": "processing"}
    with pytest.raises(AttributeNotReadyError, match="Timed out"):
        await store.create_attribute("db", "orders", AttributeSpec("n", AttributeKind.INTEGER))


async def test_index_and_collection_payloads(store, databases) -> None:
    await store.create_index(
        "db", "orders", IndexSpec("by_date", IndexKind.KEY, ("createdAt",), ("DESC",))
    )
    databases.create_index.assert_awaited_once_with(
        "db", "orders", "by_date", "key", ["createdAt"], ["DESC"]
    )

    await store.create_collection("db", "orders", "Orders", grants(("read", "any")))
    kwargs = databases.create_collection.await_args.kwargs
    assert kwargs["permissions"] == ['read("any")']
    assert kwargs["document_security"] is False


async def test_bucket_payload(store, storage) -> None:
    await store.create_bucket("documents", DOCUMENTS)
    kwargs = storage.create_bucket.await_args.kwargs
    assert kwargs["maximum_file_size"] == 50_000_000
    assert kwargs["allowed_file_extensions"] == ["pdf", "doc", "docx", "xls", "xlsx", "txt"]
    assert kwargs["compression"] == "gzip"
