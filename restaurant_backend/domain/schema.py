"""Schema value objects: the declarative shape of the backend database.

A SchemaDefinition is authored once (see restaurant_schema.py) and read
by the provisioner. Specs validate themselves on construction; index
references are the one check deferred to provisioning time so a bad
index fails alone instead of the whole definition.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from restaurant_backend.domain.enums import AttributeKind, IndexKind, PermissionAction
from restaurant_backend.domain.exceptions import SchemaValidationException

_NUMERIC_KINDS = frozenset({AttributeKind.INTEGER, AttributeKind.FLOAT})


def _default_matches_kind(kind: AttributeKind, value: Any) -> bool:
    if kind is AttributeKind.STRING:
        return isinstance(value, str)
    if kind is AttributeKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is AttributeKind.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is AttributeKind.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is AttributeKind.DATETIME:
        if not isinstance(value, str):
            return False
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return False
        return True
    return False


@dataclass(frozen=True)
class PermissionGrant:
    """A single (action, role) pair, rendered as e.g. read("any")."""

    action: PermissionAction
    role: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "action", PermissionAction(self.action))
        if not self.role:
            raise SchemaValidationException("Permission role must be a non-empty string")

    def render(self) -> str:
        return f'{self.action.value}("{self.role}")'


def grants(*pairs: tuple[str, str]) -> tuple[PermissionGrant, ...]:
    """Build a tuple of PermissionGrant from (action, role) pairs."""
    return tuple(PermissionGrant(PermissionAction(action), role) for action, role in pairs)


DEFAULT_COLLECTION_PERMISSIONS = grants(
    ("read", "any"),
    ("create", "users"),
    ("update", "users"),
    ("delete", "users"),
)


@dataclass(frozen=True)
class AttributeSpec:
    """Typed field on a collection.

    size is required for (and only allowed on) string attributes; default
    must be compatible with kind; min/max only apply to numeric kinds.
    """

    key: str
    kind: AttributeKind
    required: bool = False
    size: int | None = None
    default: Any = None
    is_array: bool = False
    min: int | float | None = None
    max: int | float | None = None

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise SchemaValidationException("Attribute key must be a non-empty string")
        try:
            object.__setattr__(self, "kind", AttributeKind(self.kind))
        except ValueError as exc:
            raise SchemaValidationException(
                f"Unsupported attribute type: {self.kind!r}", self.key
            ) from exc
        if self.kind is AttributeKind.STRING:
            if self.size is None or self.size <= 0:
                raise SchemaValidationException(
                    f"String attribute {self.key!r} requires a positive size", self.key
                )
        elif self.size is not None:
            raise SchemaValidationException(
                f"Attribute {self.key!r} of type {self.kind.value} must not declare a size",
                self.key,
            )
        if self.default is not None:
            if not _default_matches_kind(self.kind, self.default):
                raise SchemaValidationException(
                    f"Default {self.default!r} is not a valid {self.kind.value} for {self.key!r}",
                    self.key,
                )
            if self.kind is AttributeKind.STRING and len(self.default) > self.size:
                raise SchemaValidationException(
                    f"Default for {self.key!r} exceeds size {self.size}", self.key
                )
        if (self.min is not None or self.max is not None) and self.kind not in _NUMERIC_KINDS:
            raise SchemaValidationException(
                f"min/max only apply to numeric attributes ({self.key!r})", self.key
            )
        if self.min is not None and self.max is not None and self.min > self.max:
            raise SchemaValidationException(f"min > max for {self.key!r}", self.key)


@dataclass(frozen=True)
class IndexSpec:
    """Index over one or more attributes of the same collection."""

    key: str
    kind: IndexKind
    attribute_keys: tuple[str, ...]
    orders: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise SchemaValidationException("Index key must be a non-empty string")
        try:
            object.__setattr__(self, "kind", IndexKind(self.kind))
        except ValueError as exc:
            raise SchemaValidationException(
                f"Unsupported index type: {self.kind!r}", self.key
            ) from exc
        object.__setattr__(self, "attribute_keys", tuple(self.attribute_keys))
        object.__setattr__(self, "orders", tuple(self.orders))
        if not self.attribute_keys:
            raise SchemaValidationException(
                f"Index {self.key!r} must reference at least one attribute", self.key
            )
        if self.orders and len(self.orders) != len(self.attribute_keys):
            raise SchemaValidationException(
                f"Index {self.key!r} orders must match its attributes", self.key
            )
        for order in self.orders:
            if order not in ("ASC", "DESC"):
                raise SchemaValidationException(
                    f"Index {self.key!r} order must be ASC or DESC, got {order!r}", self.key
                )


@dataclass(frozen=True)
class CollectionSpec:
    """A collection with its attributes and indexes in provisioning order."""

    display_name: str
    attributes: tuple[AttributeSpec, ...]
    indexes: tuple[IndexSpec, ...] = ()
    permissions: tuple[PermissionGrant, ...] = DEFAULT_COLLECTION_PERMISSIONS
    document_security: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "indexes", tuple(self.indexes))
        object.__setattr__(self, "permissions", tuple(self.permissions))
        for label, keys in (
            ("attribute", [a.key for a in self.attributes]),
            ("index", [i.key for i in self.indexes]),
        ):
            seen: set[str] = set()
            for key in keys:
                if key in seen:
                    raise SchemaValidationException(
                        f"Duplicate {label} key {key!r} in {self.display_name!r}", key
                    )
                seen.add(key)

    @property
    def attribute_keys(self) -> frozenset[str]:
        return frozenset(a.key for a in self.attributes)

    def missing_index_references(self, index: IndexSpec) -> list[str]:
        """Return attribute keys referenced by index that this collection does not declare."""
        declared = self.attribute_keys
        return [key for key in index.attribute_keys if key not in declared]


@dataclass(frozen=True)
class BucketSpec:
    """File storage bucket with access, size, and type policy."""

    display_name: str
    permissions: tuple[PermissionGrant, ...]
    max_file_size: int
    allowed_extensions: tuple[str, ...]
    encryption: bool = True
    antivirus: bool = True
    file_security: bool = True
    enabled: bool = True
    compression: str = "gzip"

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", tuple(self.permissions))
        object.__setattr__(
            self,
            "allowed_extensions",
            tuple(ext.lower().lstrip(".") for ext in self.allowed_extensions),
        )
        if self.max_file_size <= 0:
            raise SchemaValidationException(
                f"Bucket {self.display_name!r} max_file_size must be positive"
            )
        if self.compression not in ("none", "gzip", "zstd"):
            raise SchemaValidationException(
                f"Bucket {self.display_name!r} compression must be none, gzip or zstd"
            )


@dataclass(frozen=True)
class SchemaDefinition:
    """Target schema: one database, ordered collections, ordered buckets."""

    database_id: str
    database_name: str
    collections: Mapping[str, CollectionSpec] = field(default_factory=dict)
    buckets: Mapping[str, BucketSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.database_id:
            raise SchemaValidationException("database_id must be a non-empty string")
        object.__setattr__(self, "collections", MappingProxyType(dict(self.collections)))
        object.__setattr__(self, "buckets", MappingProxyType(dict(self.buckets)))

    def attribute_count(self) -> int:
        return sum(len(c.attributes) for c in self.collections.values())

    def index_count(self) -> int:
        return sum(len(c.indexes) for c in self.collections.values())
