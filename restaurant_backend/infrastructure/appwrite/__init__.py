"""Appwrite REST integration (databases, storage, account)."""

from restaurant_backend.infrastructure.appwrite._rest_client import (
    AppwriteConflictError,
    AppwriteException,
    AppwriteRESTClient,
    AppwriteTransportError,
)
from restaurant_backend.infrastructure.appwrite.client import (
    AppwriteGateways,
    create_appwrite,
)

__all__ = [
    "AppwriteConflictError",
    "AppwriteException",
    "AppwriteGateways",
    "AppwriteRESTClient",
    "AppwriteTransportError",
    "create_appwrite",
]
