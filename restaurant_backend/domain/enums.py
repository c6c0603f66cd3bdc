"""Domain enumerations for the restaurant backend.

Enums represent fixed sets of domain values (schema kinds, provisioning
outcomes, order lifecycle).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AttributeKind(_ValuesMixin, str, Enum):
    """Attribute type declared on a collection schema."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"


class IndexKind(_ValuesMixin, str, Enum):
    """Index type accepted by the backend."""

    UNIQUE = "unique"
    KEY = "key"
    FULLTEXT = "fulltext"


class SchemaObjectKind(_ValuesMixin, str, Enum):
    """Kind of schema object reported by the provisioner."""

    DATABASE = "database"
    BUCKET = "bucket"
    COLLECTION = "collection"
    ATTRIBUTE = "attribute"
    INDEX = "index"


class ProvisioningOutcome(_ValuesMixin, str, Enum):
    """Outcome of ensuring a single schema object exists."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


class PermissionAction(_ValuesMixin, str, Enum):
    """Actions that can be granted to a role on a collection or bucket."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    WRITE = "write"


class OrderStatus(_ValuesMixin, str, Enum):
    """Order lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(_ValuesMixin, str, Enum):
    """Payment status of an order."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderType(_ValuesMixin, str, Enum):
    """How the order is fulfilled."""

    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"


class CheckStatus(_ValuesMixin, str, Enum):
    """Result level of a connectivity check."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
