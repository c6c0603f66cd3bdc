"""Appwrite identifiers (schema-in-code).

Single source of truth for the database, collection, and bucket ids used
by the schema table, the service wrappers, and the scripts.

Example:
    from restaurant_backend.infrastructure.appwrite.collections import COLLECTION_MENU_ITEMS

    await documents.list_documents(database_id, COLLECTION_MENU_ITEMS)
"""

DATABASE_ID = "restaurant-db"
DATABASE_NAME = "Khmer Seafood Restaurant Database"

# Collections
COLLECTION_USERS = "users"
COLLECTION_CATEGORIES = "categories"
COLLECTION_MENU_ITEMS = "menuItems"
COLLECTION_ORDERS = "orders"
COLLECTION_ORDER_ITEMS = "orderItems"

# Storage buckets
BUCKET_IMAGES = "images"
BUCKET_DOCUMENTS = "documents"
