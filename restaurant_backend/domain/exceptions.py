"""Domain exceptions for the restaurant backend.

Defines domain-level exceptions that represent business rule violations
and service failures. These are independent of the Appwrite transport;
services rewrap backend errors into them.
"""

from typing import Any


class RestaurantException(Exception):
    """Base exception for all restaurant backend errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(RestaurantException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(RestaurantException):
    """Raised when login, registration, or logout fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(RestaurantException):
    """Raised when a requested document or resource does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and ID.

        Args:
            resource_type: Type of resource (e.g. 'order', 'menu_item').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.replace('_', ' ').title()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ServiceException(RestaurantException):
    """Raised by service wrappers when a backend call fails.

    The message is the backend's message when it has one, otherwise a
    fixed fallback describing the operation (e.g. 'Failed to fetch categories').
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, "SERVICE_ERROR", details)


class SchemaValidationException(RestaurantException):
    """Raised when a schema definition is malformed (bad kind, size, default, duplicate key)."""

    def __init__(self, message: str, object_key: str | None = None) -> None:
        details = {"object_key": object_key} if object_key else {}
        super().__init__(message, "SCHEMA_VALIDATION_ERROR", details)


class InvalidIndexReferenceException(SchemaValidationException):
    """Raised when an index names attribute keys that the collection does not declare."""

    def __init__(self, collection_id: str, index_key: str, missing: list[str]) -> None:
        super().__init__(
            f"Index {index_key!r} on {collection_id!r} references unknown attributes: "
            f"{', '.join(missing)}",
            index_key,
        )
        self.error_code = "INVALID_INDEX_REFERENCE"
        self.details.update({"collection_id": collection_id, "missing": missing})


class RemoteStoreException(RestaurantException):
    """Raised when a call to the backend store fails.

    Attributes:
        code: HTTP status code (0 when no response was received).
        type: Backend error type, e.g. 'collection_not_found'.
    """

    def __init__(self, message: str, code: int = 0, type: str | None = None) -> None:
        super().__init__(message, "REMOTE_STORE_ERROR", {"code": code, "type": type})
        self.code = code
        self.type = type


class RemoteConflictException(RemoteStoreException):
    """Raised when a create call targets an object that already exists."""


class RemoteTransportException(RemoteStoreException):
    """Raised when the backend could not be reached (DNS, timeout, connection reset)."""
