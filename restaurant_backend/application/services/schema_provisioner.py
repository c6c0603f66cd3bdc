"""Idempotent schema provisioning against a remote schema store.

Order: database, then buckets, then each collection with its attributes
followed by its indexes. Every call is awaited before the next one is
issued. "Already exists" is a successful outcome, so re-running against a
provisioned (or half-provisioned) target only fills the gaps.

Failure policy:
- database failure aborts the run;
- a bucket failure is isolated to that bucket;
- inside a collection the first failure stops its remaining attributes and
  indexes, and provisioning continues with the next collection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from restaurant_backend.application.dtos.provisioning import (
    ObjectResult,
    ProvisioningReport,
)
from restaurant_backend.application.interfaces.stores import ISchemaStore
from restaurant_backend.domain.enums import ProvisioningOutcome, SchemaObjectKind
from restaurant_backend.domain.exceptions import (
    InvalidIndexReferenceException,
    RemoteConflictException,
    RemoteStoreException,
)
from restaurant_backend.domain.schema import (
    BucketSpec,
    CollectionSpec,
    SchemaDefinition,
)

logger = logging.getLogger(__name__)

_Call = Callable[[], Awaitable[Any]]


class SchemaProvisioner:
    """Applies a SchemaDefinition to an ISchemaStore and reports every object attempted."""

    def __init__(self, store: ISchemaStore) -> None:
        self._store = store

    async def provision(
        self,
        schema: SchemaDefinition,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ProvisioningReport:
        """Ensure the database, buckets, collections, attributes, and indexes exist.

        Args:
            schema: Target schema (read-only).
            cancel_event: Optional signal checked between top-level objects
                (database, each bucket, each collection), never mid-collection.

        Returns:
            ProvisioningReport listing each attempted object with its outcome.
        """
        report = ProvisioningReport(database_id=schema.database_id)
        logger.info("Provisioning database %s", schema.database_id)

        if self._cancelled(cancel_event, report):
            return report

        db_result = await self._ensure(
            report,
            SchemaObjectKind.DATABASE,
            schema.database_id,
            create=lambda: self._store.create_database(schema.database_id, schema.database_name),
            fetch=lambda: self._store.get_database(schema.database_id),
        )
        if not db_result.ok:
            report.aborted = True
            logger.error("Database %s could not be ensured; aborting", schema.database_id)
            return report

        for bucket_id, bucket in schema.buckets.items():
            if self._cancelled(cancel_event, report):
                return report
            await self._ensure_bucket(report, bucket_id, bucket)

        for collection_id, collection in schema.collections.items():
            if self._cancelled(cancel_event, report):
                return report
            await self._ensure_collection(report, schema.database_id, collection_id, collection)

        self._log_summary(report)
        return report

    # -----------------
    # Private helpers
    # -----------------

    @staticmethod
    def _cancelled(cancel_event: asyncio.Event | None, report: ProvisioningReport) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            report.cancelled = True
            logger.warning("Provisioning of %s cancelled", report.database_id)
            return True
        return False

    async def _ensure_bucket(
        self, report: ProvisioningReport, bucket_id: str, bucket: BucketSpec
    ) -> ObjectResult:
        return await self._ensure(
            report,
            SchemaObjectKind.BUCKET,
            bucket_id,
            create=lambda: self._store.create_bucket(bucket_id, bucket),
            fetch=lambda: self._store.get_bucket(bucket_id),
        )

    async def _ensure_collection(
        self,
        report: ProvisioningReport,
        database_id: str,
        collection_id: str,
        collection: CollectionSpec,
    ) -> None:
        result = await self._ensure(
            report,
            SchemaObjectKind.COLLECTION,
            collection_id,
            create=lambda: self._store.create_collection(
                database_id,
                collection_id,
                collection.display_name,
                collection.permissions,
                collection.document_security,
            ),
            fetch=lambda: self._store.get_collection(database_id, collection_id),
        )
        if not result.ok:
            return

        for attribute in collection.attributes:
            attr_result = await self._ensure(
                report,
                SchemaObjectKind.ATTRIBUTE,
                attribute.key,
                create=lambda attribute=attribute: self._store.create_attribute(
                    database_id, collection_id, attribute
                ),
                parent_id=collection_id,
            )
            if not attr_result.ok:
                logger.error(
                    "Stopping %s after attribute %s failed", collection_id, attribute.key
                )
                return

        for index in collection.indexes:
            missing = collection.missing_index_references(index)
            if missing:
                exc = InvalidIndexReferenceException(collection_id, index.key, missing)
                report.add(
                    ObjectResult(
                        SchemaObjectKind.INDEX,
                        index.key,
                        ProvisioningOutcome.FAILED,
                        parent_id=collection_id,
                        reason=f"{exc.error_code}: {exc.message}",
                    )
                )
                logger.error("Invalid index %s.%s: %s", collection_id, index.key, exc.message)
                return
            index_result = await self._ensure(
                report,
                SchemaObjectKind.INDEX,
                index.key,
                create=lambda index=index: self._store.create_index(
                    database_id, collection_id, index
                ),
                parent_id=collection_id,
            )
            if not index_result.ok:
                logger.error("Stopping %s after index %s failed", collection_id, index.key)
                return

    async def _ensure(
        self,
        report: ProvisioningReport,
        kind: SchemaObjectKind,
        object_id: str,
        *,
        create: _Call,
        fetch: _Call | None = None,
        parent_id: str | None = None,
    ) -> ObjectResult:
        """Create one object; a conflict (optionally confirmed by fetch) is AlreadyExists."""
        label = f"{parent_id}.{object_id}" if parent_id else object_id
        try:
            await create()
        except RemoteConflictException:
            if fetch is not None:
                try:
                    await fetch()
                except RemoteStoreException as exc:
                    logger.error("%s %s exists but could not be fetched: %s", kind.value, label, exc)
                    return report.add(
                        ObjectResult(kind, object_id, ProvisioningOutcome.FAILED, parent_id, str(exc))
                    )
            logger.info("%s %s already exists", kind.value.capitalize(), label)
            return report.add(
                ObjectResult(kind, object_id, ProvisioningOutcome.ALREADY_EXISTS, parent_id)
            )
        except RemoteStoreException as exc:
            logger.error("Error creating %s %s: %s", kind.value, label, exc)
            return report.add(
                ObjectResult(kind, object_id, ProvisioningOutcome.FAILED, parent_id, str(exc))
            )
        logger.info("%s created: %s", kind.value.capitalize(), label)
        return report.add(ObjectResult(kind, object_id, ProvisioningOutcome.CREATED, parent_id))

    @staticmethod
    def _log_summary(report: ProvisioningReport) -> None:
        summary = report.summary()
        logger.info(
            "Provisioning %s finished (success=%s): %s",
            report.database_id,
            report.success,
            ", ".join(
                f"{kind}={counts['created']} created/{counts['already_exists']} existing/"
                f"{counts['failed']} failed"
                for kind, counts in summary.items()
            ),
        )


async def provision(
    schema: SchemaDefinition,
    store: ISchemaStore,
    *,
    cancel_event: asyncio.Event | None = None,
) -> ProvisioningReport:
    """Provision schema against store (see SchemaProvisioner.provision)."""
    return await SchemaProvisioner(store).provision(schema, cancel_event=cancel_event)
