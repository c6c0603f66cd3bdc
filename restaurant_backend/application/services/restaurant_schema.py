"""Restaurant schema table: five collections and two storage buckets.

Authoritative contract for what the provisioner creates. Used by the
setup script, the sample-data loader, and the service wrappers (field
names). No infrastructure deps.
"""

from restaurant_backend.domain.enums import AttributeKind, IndexKind
from restaurant_backend.domain.schema import (
    AttributeSpec,
    BucketSpec,
    CollectionSpec,
    IndexSpec,
    SchemaDefinition,
    grants,
)
from restaurant_backend.infrastructure.appwrite.collections import (
    BUCKET_DOCUMENTS,
    BUCKET_IMAGES,
    COLLECTION_CATEGORIES,
    COLLECTION_MENU_ITEMS,
    COLLECTION_ORDER_ITEMS,
    COLLECTION_ORDERS,
    COLLECTION_USERS,
    DATABASE_ID,
    DATABASE_NAME,
)

STRING = AttributeKind.STRING
INTEGER = AttributeKind.INTEGER
FLOAT = AttributeKind.FLOAT
BOOLEAN = AttributeKind.BOOLEAN
DATETIME = AttributeKind.DATETIME

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp")
DOCUMENT_EXTENSIONS = ("pdf", "doc", "docx", "xls", "xlsx", "txt")
MAX_IMAGE_SIZE = 10_000_000  # 10MB
MAX_DOCUMENT_SIZE = 50_000_000  # 50MB


def _s(key: str, size: int, required: bool = False, default: str | None = None) -> AttributeSpec:
    return AttributeSpec(key, STRING, required=required, size=size, default=default)


def _idx(key: str, kind: IndexKind, *attributes: str) -> IndexSpec:
    return IndexSpec(key, kind, attributes)


USERS = CollectionSpec(
    display_name="Users",
    attributes=(
        _s("name", 255, required=True),
        _s("email", 255, required=True),
        _s("phone", 20),
        _s("role", 50, required=True, default="customer"),
        _s("status", 20, required=True, default="active"),
        AttributeSpec("createdAt", DATETIME, required=True),
        AttributeSpec("updatedAt", DATETIME, required=True),
    ),
    indexes=(
        _idx("email_index", IndexKind.UNIQUE, "email"),
        _idx("role_index", IndexKind.KEY, "role"),
    ),
)

CATEGORIES = CollectionSpec(
    display_name="Menu Categories",
    attributes=(
        _s("name", 100, required=True),
        _s("description", 500),
        _s("image", 255),
        AttributeSpec("sortOrder", INTEGER, required=True, default=0),
        AttributeSpec("isActive", BOOLEAN, required=True, default=True),
        AttributeSpec("createdAt", DATETIME, required=True),
        AttributeSpec("updatedAt", DATETIME, required=True),
    ),
    indexes=(
        _idx("name_index", IndexKind.UNIQUE, "name"),
        _idx("sort_index", IndexKind.KEY, "sortOrder"),
        _idx("active_index", IndexKind.KEY, "isActive"),
    ),
)

MENU_ITEMS = CollectionSpec(
    display_name="Menu Items",
    attributes=(
        _s("name", 150, required=True),
        _s("description", 1000),
        AttributeSpec("price", FLOAT, required=True),
        _s("categoryId", 36, required=True),
        _s("image", 255),
        _s("ingredients", 500),
        _s("allergens", 200),
        AttributeSpec("isSpicy", BOOLEAN, required=True, default=False),
        AttributeSpec("isVegetarian", BOOLEAN, required=True, default=False),
        AttributeSpec("isAvailable", BOOLEAN, required=True, default=True),
        AttributeSpec("prepTime", INTEGER),
        AttributeSpec("calories", INTEGER),
        AttributeSpec("sortOrder", INTEGER, required=True, default=0),
        AttributeSpec("createdAt", DATETIME, required=True),
        AttributeSpec("updatedAt", DATETIME, required=True),
    ),
    indexes=(
        _idx("category_index", IndexKind.KEY, "categoryId"),
        _idx("price_index", IndexKind.KEY, "price"),
        _idx("available_index", IndexKind.KEY, "isAvailable"),
        _idx("sort_index", IndexKind.KEY, "sortOrder"),
    ),
)

ORDERS = CollectionSpec(
    display_name="Orders",
    attributes=(
        _s("orderNumber", 20, required=True),
        _s("customerId", 36, required=True),
        _s("customerName", 255, required=True),
        _s("customerPhone", 20),
        _s("customerEmail", 255),
        AttributeSpec("tableNumber", INTEGER),
        _s("orderType", 20, required=True),  # dine-in, takeaway, delivery
        _s("status", 20, required=True, default="pending"),
        AttributeSpec("subtotal", FLOAT, required=True),
        AttributeSpec("tax", FLOAT, required=True, default=0),
        AttributeSpec("tip", FLOAT, default=0),
        AttributeSpec("total", FLOAT, required=True),
        _s("paymentMethod", 30),
        _s("paymentStatus", 20, required=True, default="pending"),
        _s("notes", 500),
        AttributeSpec("estimatedTime", INTEGER),
        AttributeSpec("createdAt", DATETIME, required=True),
        AttributeSpec("updatedAt", DATETIME, required=True),
    ),
    indexes=(
        _idx("order_number_index", IndexKind.UNIQUE, "orderNumber"),
        _idx("customer_index", IndexKind.KEY, "customerId"),
        _idx("status_index", IndexKind.KEY, "status"),
        _idx("type_index", IndexKind.KEY, "orderType"),
        _idx("date_index", IndexKind.KEY, "createdAt"),
    ),
)

ORDER_ITEMS = CollectionSpec(
    display_name="Order Items",
    attributes=(
        _s("orderId", 36, required=True),
        _s("menuItemId", 36, required=True),
        _s("menuItemName", 150, required=True),
        AttributeSpec("quantity", INTEGER, required=True),
        AttributeSpec("unitPrice", FLOAT, required=True),
        AttributeSpec("totalPrice", FLOAT, required=True),
        _s("specialInstructions", 300),
        _s("status", 20, required=True, default="pending"),
        AttributeSpec("createdAt", DATETIME, required=True),
    ),
    indexes=(
        _idx("order_index", IndexKind.KEY, "orderId"),
        _idx("menu_item_index", IndexKind.KEY, "menuItemId"),
        _idx("status_index", IndexKind.KEY, "status"),
    ),
)

IMAGES = BucketSpec(
    display_name="Restaurant Images",
    permissions=grants(
        ("read", "any"),
        ("create", "users"),
        ("update", "users"),
        ("delete", "users"),
    ),
    max_file_size=MAX_IMAGE_SIZE,
    allowed_extensions=IMAGE_EXTENSIONS,
)

DOCUMENTS = BucketSpec(
    display_name="Restaurant Documents",
    permissions=grants(
        ("read", "users"),
        ("create", "users"),
        ("update", "users"),
        ("delete", "users"),
    ),
    max_file_size=MAX_DOCUMENT_SIZE,
    allowed_extensions=DOCUMENT_EXTENSIONS,
)


def build_restaurant_schema(
    database_id: str = DATABASE_ID, database_name: str = DATABASE_NAME
) -> SchemaDefinition:
    """Return the restaurant SchemaDefinition (collections and buckets in provisioning order)."""
    return SchemaDefinition(
        database_id=database_id,
        database_name=database_name,
        collections={
            COLLECTION_USERS: USERS,
            COLLECTION_CATEGORIES: CATEGORIES,
            COLLECTION_MENU_ITEMS: MENU_ITEMS,
            COLLECTION_ORDERS: ORDERS,
            COLLECTION_ORDER_ITEMS: ORDER_ITEMS,
        },
        buckets={
            BUCKET_IMAGES: IMAGES,
            BUCKET_DOCUMENTS: DOCUMENTS,
        },
    )
