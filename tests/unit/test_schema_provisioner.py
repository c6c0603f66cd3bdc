"""Tests for SchemaProvisioner (in-memory schema store)."""

import asyncio

from restaurant_backend.application.services.schema_provisioner import (
    SchemaProvisioner,
    provision,
)
from restaurant_backend.domain.enums import (
    AttributeKind,
    IndexKind,
    ProvisioningOutcome,
    SchemaObjectKind,
)
from restaurant_backend.domain.exceptions import (
    RemoteConflictException,
    RemoteStoreException,
    RemoteTransportException,
)
from restaurant_backend.domain.schema import (
    AttributeSpec,
    CollectionSpec,
    IndexSpec,
    SchemaDefinition,
)
from tests.fakes import InMemorySchemaStore

CREATED = ProvisioningOutcome.CREATED
EXISTS = ProvisioningOutcome.ALREADY_EXISTS
FAILED = ProvisioningOutcome.FAILED


def _small_schema(*collections: tuple[str, CollectionSpec]) -> SchemaDefinition:
    return SchemaDefinition("db", "Test DB", collections=dict(collections))


def _things(index_attr: str = "name") -> CollectionSpec:
    return CollectionSpec(
        "Things",
        (
            AttributeSpec("name", AttributeKind.STRING, size=50, required=True),
            AttributeSpec("rank", AttributeKind.INTEGER, default=0),
        ),
        (IndexSpec("name_index", IndexKind.KEY, (index_attr,)),),
    )


class TestFreshProvisioning:
    async def test_creates_everything(self, restaurant_schema, schema_store) -> None:
        report = await provision(restaurant_schema, schema_store)

        assert report.success
        assert report.count(SchemaObjectKind.DATABASE, CREATED) == 1
        assert report.count(SchemaObjectKind.BUCKET, CREATED) == 2
        assert report.count(SchemaObjectKind.COLLECTION, CREATED) == 5
        assert report.count(SchemaObjectKind.ATTRIBUTE, CREATED) == 56
        assert report.count(SchemaObjectKind.INDEX, CREATED) == 17
        assert report.failed() == []

    async def test_call_order(self, restaurant_schema, schema_store) -> None:
        await provision(restaurant_schema, schema_store)

        ops = [op for op, _ in schema_store.calls]
        assert ops[0] == "create_database"
        assert ops[1:3] == ["create_bucket", "create_bucket"]
        assert schema_store.calls_of("create_collection") == [
            "users",
            "categories",
            "menuItems",
            "orders",
            "orderItems",
        ]
        # Within each collection, every attribute precedes every index.
        for collection_id, collection in restaurant_schema.collections.items():
            positions = {
                (op, target): i for i, (op, target) in enumerate(schema_store.calls)
            }
            last_attr = max(
                positions[("create_attribute", f"{collection_id}.{a.key}")]
                for a in collection.attributes
            )
            first_index = min(
                positions[("create_index", f"{collection_id}.{i.key}")]
                for i in collection.indexes
            )
            assert last_attr < first_index
            assert positions[("create_collection", collection_id)] < last_attr

    async def test_attributes_follow_declaration_order(
        self, restaurant_schema, schema_store
    ) -> None:
        await provision(restaurant_schema, schema_store)
        created = [
            t.split(".", 1)[1]
            for t in schema_store.calls_of("create_attribute")
            if t.startswith("orders.")
        ]
        assert created == [a.key for a in restaurant_schema.collections["orders"].attributes]

    async def test_collection_results_have_no_parent(
        self, restaurant_schema, schema_store
    ) -> None:
        report = await provision(restaurant_schema, schema_store)
        assert all(r.parent_id is None for r in report.of_kind(SchemaObjectKind.COLLECTION))
        assert all(
            r.parent_id in restaurant_schema.collections
            for r in report.of_kind(SchemaObjectKind.ATTRIBUTE)
        )


class TestIdempotence:
    async def test_second_run_reports_already_exists(
        self, restaurant_schema, schema_store
    ) -> None:
        await provision(restaurant_schema, schema_store)
        report = await provision(restaurant_schema, schema_store)

        assert report.success
        assert report.count(SchemaObjectKind.DATABASE, EXISTS) == 1
        assert report.count(SchemaObjectKind.BUCKET, EXISTS) == 2
        assert report.count(SchemaObjectKind.COLLECTION, EXISTS) == 5
        assert report.count(SchemaObjectKind.ATTRIBUTE, EXISTS) == 56
        assert report.count(SchemaObjectKind.INDEX, EXISTS) == 17
        assert report.count(SchemaObjectKind.ATTRIBUTE, CREATED) == 0

    async def test_existing_objects_are_fetched(self, restaurant_schema, schema_store) -> None:
        await provision(restaurant_schema, schema_store)
        schema_store.calls.clear()
        await provision(restaurant_schema, schema_store)

        assert schema_store.calls_of("get_database") == ["restaurant-db"]
        assert schema_store.calls_of("get_bucket") == ["images", "documents"]
        assert len(schema_store.calls_of("get_collection")) == 5

    async def test_existing_collection_gets_missing_attributes(self, schema_store) -> None:
        schema = _small_schema(("things", _things()))
        schema_store.databases["db"] = "Test DB"
        schema_store.collections["things"] = {"name": "Things"}
        schema_store.attributes["things"] = {
            "name": AttributeSpec("name", AttributeKind.STRING, size=50, required=True)
        }
        schema_store.indexes["things"] = {}

        report = await SchemaProvisioner(schema_store).provision(schema)

        assert report.success
        outcomes = {r.qualified_id: r.outcome for r in report.results}
        assert outcomes["things"] is EXISTS
        assert outcomes["things.name"] is EXISTS
        assert outcomes["things.rank"] is CREATED
        assert outcomes["things.name_index"] is CREATED


class TestFailureIsolation:
    async def test_attribute_failure_stops_only_its_collection(
        self, restaurant_schema, schema_store
    ) -> None:
        schema_store.fail_on[("create_attribute", "menuItems.price")] = RemoteStoreException(
            "Invalid default", 400, "attribute_value_invalid"
        )

        report = await provision(restaurant_schema, schema_store)

        assert not report.success
        assert not report.aborted
        failed = report.failed()
        assert [r.qualified_id for r in failed] == ["menuItems.price"]
        assert failed[0].reason == "Invalid default"
        attempted = schema_store.calls_of("create_attribute")
        assert "menuItems.categoryId" not in attempted
        assert not [t for t in schema_store.calls_of("create_index") if t.startswith("menuItems.")]
        assert report.collection_succeeded("orders")
        assert report.collection_succeeded("orderItems")
        assert not report.collection_succeeded("menuItems")

    async def test_index_failure_stops_remaining_indexes(
        self, restaurant_schema, schema_store
    ) -> None:
        schema_store.fail_on[("create_index", "users.email_index")] = RemoteStoreException(
            "Index limit", 400
        )

        report = await provision(restaurant_schema, schema_store)

        assert "users.role_index" not in schema_store.calls_of("create_index")
        assert report.collection_succeeded("categories")
        assert report.count(SchemaObjectKind.INDEX, CREATED) == 15

    async def test_bucket_failure_is_isolated(self, restaurant_schema, schema_store) -> None:
        schema_store.fail_on[("create_bucket", "images")] = RemoteStoreException(
            "Storage disabled", 501
        )

        report = await provision(restaurant_schema, schema_store)

        assert [r.qualified_id for r in report.failed()] == ["images"]
        assert "documents" in schema_store.buckets
        assert report.count(SchemaObjectKind.COLLECTION, CREATED) == 5

    async def test_collection_transport_error_moves_on(
        self, restaurant_schema, schema_store
    ) -> None:
        schema_store.fail_on[("create_collection", "users")] = RemoteTransportException(
            "connection reset"
        )

        report = await provision(restaurant_schema, schema_store)

        assert [r.qualified_id for r in report.failed()] == ["users"]
        assert not [t for t in schema_store.calls_of("create_attribute") if t.startswith("users.")]
        assert report.collection_succeeded("categories")

    async def test_database_failure_aborts(self, restaurant_schema, schema_store) -> None:
        schema_store.fail_on[("create_database", "restaurant-db")] = RemoteStoreException(
            "Unauthorized", 401, "user_unauthorized"
        )

        report = await provision(restaurant_schema, schema_store)

        assert report.aborted
        assert not report.success
        assert len(report.results) == 1
        assert schema_store.calls == [("create_database", "restaurant-db")]

    async def test_database_conflict_with_failed_fetch_aborts(
        self, restaurant_schema, schema_store
    ) -> None:
        schema_store.fail_on[("create_database", "restaurant-db")] = RemoteConflictException(
            "exists", 409
        )
        report = await provision(restaurant_schema, schema_store)

        assert report.aborted
        assert report.results[0].outcome is FAILED
        assert report.results[0].reason == "Database not found"


class TestInvalidIndexReference:
    async def test_bad_index_fails_without_remote_call(self, schema_store) -> None:
        schema = _small_schema(("bad", _things("ghost")), ("good", _things()))

        report = await SchemaProvisioner(schema_store).provision(schema)

        bad = next(r for r in report.results if r.qualified_id == "bad.name_index")
        assert bad.outcome is FAILED
        assert bad.reason.startswith("INVALID_INDEX_REFERENCE")
        assert "ghost" in bad.reason
        assert "bad.name_index" not in schema_store.calls_of("create_index")
        assert report.collection_succeeded("good")


class TestCancellation:
    async def test_cancel_before_start(self, restaurant_schema, schema_store) -> None:
        event = asyncio.Event()
        event.set()

        report = await provision(restaurant_schema, schema_store, cancel_event=event)

        assert report.cancelled
        assert not report.success
        assert schema_store.calls == []

    async def test_cancel_finishes_current_collection(self, restaurant_schema) -> None:
        event = asyncio.Event()

        class CancellingStore(InMemorySchemaStore):
            async def create_collection(self, database_id, collection_id, *args, **kwargs):
                result = await super().create_collection(
                    database_id, collection_id, *args, **kwargs
                )
                if collection_id == "users":
                    event.set()
                return result

        store = CancellingStore()
        report = await provision(restaurant_schema, store, cancel_event=event)

        assert report.cancelled
        assert store.calls_of("create_collection") == ["users"]
        assert report.collection_succeeded("users")
        assert len(store.indexes["users"]) == 2
