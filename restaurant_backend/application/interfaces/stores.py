"""Gateway interfaces (ports) for the application layer.

Protocols define the backend capabilities services depend on (DIP). The
Appwrite REST implementations live in infrastructure.appwrite; tests use
in-memory fakes.

Create calls raise RemoteConflictException when the object already exists
and RemoteStoreException for any other failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from restaurant_backend.domain.schema import (
        AttributeSpec,
        BucketSpec,
        IndexSpec,
        PermissionGrant,
    )


class ISchemaStore(Protocol):
    """Remote schema-bearing store consumed by the schema provisioner."""

    async def create_database(self, database_id: str, name: str) -> dict[str, Any]:
        """Create a database."""

    async def get_database(self, database_id: str) -> dict[str, Any]:
        """Fetch an existing database."""

    async def create_collection(
        self,
        database_id: str,
        collection_id: str,
        name: str,
        permissions: tuple[PermissionGrant, ...],
        document_security: bool = False,
    ) -> dict[str, Any]:
        """Create a collection inside a database."""

    async def get_collection(self, database_id: str, collection_id: str) -> dict[str, Any]:
        """Fetch an existing collection."""

    async def create_attribute(
        self, database_id: str, collection_id: str, spec: AttributeSpec
    ) -> dict[str, Any]:
        """Create an attribute and wait until the backend reports it usable."""

    async def create_index(
        self, database_id: str, collection_id: str, spec: IndexSpec
    ) -> dict[str, Any]:
        """Create an index over existing attributes."""

    async def create_bucket(self, bucket_id: str, spec: BucketSpec) -> dict[str, Any]:
        """Create a storage bucket."""

    async def get_bucket(self, bucket_id: str) -> dict[str, Any]:
        """Fetch an existing storage bucket."""


class IDocumentStore(Protocol):
    """Document CRUD on provisioned collections."""

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
        permissions: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a document; returns it including $id."""

    async def get_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> dict[str, Any]:
        """Fetch one document."""

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: list[str] | None = None,
    ) -> dict[str, Any]:
        """List documents; returns {'total': int, 'documents': [...]}."""

    async def update_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """Patch a document with the given fields."""

    async def delete_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> None:
        """Delete a document."""


class IFileStore(Protocol):
    """File upload and preview URLs for storage buckets."""

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """Upload a file; returns the file record including $id."""

    def get_file_preview_url(
        self, bucket_id: str, file_id: str, width: int = 400, height: int = 300
    ) -> str:
        """Return the preview URL for an image file."""


class IAccountGateway(Protocol):
    """Account and session operations for the current user."""

    async def get(self) -> dict[str, Any]:
        """Return the logged-in account."""

    async def create(
        self, user_id: str, email: str, password: str, name: str | None = None
    ) -> dict[str, Any]:
        """Create a new account."""

    async def create_email_password_session(
        self, email: str, password: str
    ) -> dict[str, Any]:
        """Log in and return the session."""

    async def delete_session(self, session_id: str = "current") -> None:
        """Log out (delete a session)."""
