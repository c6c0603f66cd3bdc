"""Gateway interfaces (ports) consumed by application services."""

from restaurant_backend.application.interfaces.stores import (
    IAccountGateway,
    IDocumentStore,
    IFileStore,
    ISchemaStore,
)

__all__ = ["IAccountGateway", "IDocumentStore", "IFileStore", "ISchemaStore"]
