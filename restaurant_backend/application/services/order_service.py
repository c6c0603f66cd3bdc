"""Order service: orders, their line items, status updates, and statistics."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from restaurant_backend.application.dtos.order import (
    OrderCreate,
    OrderItemCreate,
    OrderStats,
    order_stats_from_documents,
)
from restaurant_backend.application.interfaces.stores import IDocumentStore
from restaurant_backend.domain.enums import OrderStatus, OrderType, PaymentStatus
from restaurant_backend.domain.exceptions import (
    RemoteStoreException,
    ResourceNotFoundException,
    ServiceException,
    ValidationException,
)
from restaurant_backend.infrastructure.appwrite.collections import (
    COLLECTION_ORDER_ITEMS,
    COLLECTION_ORDERS,
)
from restaurant_backend.infrastructure.appwrite.queries import Query
from restaurant_backend.shared.utils.datetime import day_bounds_utc, iso_now, to_iso
from restaurant_backend.shared.utils.generators import generate_cuid, generate_order_number

logger = logging.getLogger(__name__)

_STATS_PAGE_SIZE = 100

_E = TypeVar("_E", bound=Enum)


def _parse_enum(enum_cls: type[_E], value: Any, field: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationException(
            f"Invalid {field.replace('_', ' ')}: {value!r}", field
        ) from exc


class OrderService:
    """Reads and writes the orders and orderItems collections."""

    def __init__(self, documents: IDocumentStore, database_id: str) -> None:
        self._documents = documents
        self._database_id = database_id

    async def _list_orders(self, queries: list[str], operation: str) -> dict[str, Any]:
        try:
            return await self._documents.list_documents(
                self._database_id, COLLECTION_ORDERS, queries
            )
        except RemoteStoreException as exc:
            logger.error("Error in %s: %s", operation, exc)
            raise ServiceException(exc.message or f"Failed to {operation.replace('_', ' ')}", operation) from exc

    async def _update_order(
        self, order_id: str, data: dict[str, Any], operation: str
    ) -> dict[str, Any]:
        try:
            return await self._documents.update_document(
                self._database_id,
                COLLECTION_ORDERS,
                order_id,
                {**data, "updatedAt": iso_now()},
            )
        except RemoteStoreException as exc:
            logger.error("Error in %s for order %s: %s", operation, order_id, exc)
            raise ServiceException(exc.message or f"Failed to {operation.replace('_', ' ')}", operation) from exc

    async def create_order(self, order: OrderCreate) -> dict[str, Any]:
        """Create an order with a generated order number; status and payment start as pending."""
        if min(order.subtotal, order.tax, order.total, order.tip) < 0:
            raise ValidationException("Order amounts must not be negative", "total")
        now = iso_now()
        data: dict[str, Any] = {
            "orderNumber": generate_order_number(),
            "customerId": order.customer_id,
            "customerName": order.customer_name,
            "customerPhone": order.customer_phone,
            "customerEmail": order.customer_email,
            "tableNumber": order.table_number,
            "orderType": _parse_enum(OrderType, order.order_type, "order_type").value,
            "status": OrderStatus.PENDING.value,
            "subtotal": float(order.subtotal),
            "tax": float(order.tax),
            "tip": float(order.tip),
            "total": float(order.total),
            "paymentMethod": order.payment_method,
            "paymentStatus": PaymentStatus.PENDING.value,
            "notes": order.notes or "",
            "estimatedTime": order.estimated_time,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            return await self._documents.create_document(
                self._database_id, COLLECTION_ORDERS, generate_cuid(), data
            )
        except RemoteStoreException as exc:
            logger.error("Error creating order: %s", exc)
            raise ServiceException(exc.message or "Failed to create order", "create_order") from exc

    async def add_order_items(
        self, order_id: str, items: list[OrderItemCreate]
    ) -> list[dict[str, Any]]:
        """Create one orderItems document per item, in order."""
        for item in items:
            if item.quantity <= 0:
                raise ValidationException("Quantity must be at least 1", "quantity")
            if item.unit_price < 0:
                raise ValidationException("Unit price must not be negative", "unit_price")
        created: list[dict[str, Any]] = []
        try:
            for item in items:
                created.append(
                    await self._documents.create_document(
                        self._database_id,
                        COLLECTION_ORDER_ITEMS,
                        generate_cuid(),
                        {
                            "orderId": order_id,
                            "menuItemId": item.menu_item_id,
                            "menuItemName": item.menu_item_name,
                            "quantity": int(item.quantity),
                            "unitPrice": float(item.unit_price),
                            "totalPrice": round(item.quantity * item.unit_price, 2),
                            "specialInstructions": item.special_instructions or "",
                            "status": OrderStatus.PENDING.value,
                            "createdAt": iso_now(),
                        },
                    )
                )
        except RemoteStoreException as exc:
            logger.error("Error adding order items to %s: %s", order_id, exc)
            raise ServiceException(exc.message or "Failed to add order items", "add_order_items") from exc
        return created

    async def get_order(self, order_id: str) -> dict[str, Any]:
        """Return the order document with its line items under 'items'."""
        try:
            order = await self._documents.get_document(
                self._database_id, COLLECTION_ORDERS, order_id
            )
            items = await self._documents.list_documents(
                self._database_id,
                COLLECTION_ORDER_ITEMS,
                [Query.equal("orderId", order_id)],
            )
        except RemoteStoreException as exc:
            if exc.code == 404:
                raise ResourceNotFoundException("order", order_id) from exc
            logger.error("Error getting order %s: %s", order_id, exc)
            raise ServiceException(exc.message or "Failed to get order", "get_order") from exc
        return {**order, "items": items.get("documents", [])}

    async def get_user_orders(
        self, customer_id: str, limit: int = 25, offset: int = 0
    ) -> dict[str, Any]:
        return await self._list_orders(
            [
                Query.equal("customerId", customer_id),
                Query.order_desc("$createdAt"),
                Query.limit(limit),
                Query.offset(offset),
            ],
            "get_user_orders",
        )

    async def get_all_orders(
        self, status: OrderStatus | str | None = None, limit: int = 50, offset: int = 0
    ) -> dict[str, Any]:
        queries = [Query.order_desc("$createdAt"), Query.limit(limit), Query.offset(offset)]
        if status:
            queries.append(Query.equal("status", _parse_enum(OrderStatus, status, "status").value))
        return await self._list_orders(queries, "get_all_orders")

    async def update_order_status(
        self,
        order_id: str,
        status: OrderStatus | str,
        estimated_time: int | None = None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {"status": _parse_enum(OrderStatus, status, "status").value}
        if estimated_time is not None:
            data["estimatedTime"] = estimated_time
        return await self._update_order(order_id, data, "update_order_status")

    async def update_payment_status(
        self,
        order_id: str,
        payment_status: PaymentStatus | str,
        payment_method: str | None = None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "paymentStatus": _parse_enum(PaymentStatus, payment_status, "payment_status").value
        }
        if payment_method:
            data["paymentMethod"] = payment_method
        return await self._update_order(order_id, data, "update_payment_status")

    async def get_todays_orders(self) -> dict[str, Any]:
        """Orders created during the current UTC day, newest first."""
        start, end = day_bounds_utc()
        return await self._list_orders(
            [
                Query.greater_than_equal("$createdAt", to_iso(start)),
                Query.less_than_equal("$createdAt", to_iso(end)),
                Query.order_desc("$createdAt"),
            ],
            "get_todays_orders",
        )

    async def get_order_stats(
        self,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> OrderStats:
        """Aggregate every order in the range (all pages, not just the first)."""
        base = [Query.order_desc("$createdAt")]
        if start_date:
            base.append(Query.greater_than_equal("$createdAt", to_iso(start_date)))
        if end_date:
            base.append(Query.less_than_equal("$createdAt", to_iso(end_date)))

        documents: list[dict[str, Any]] = []
        offset = 0
        while True:
            page = await self._list_orders(
                [*base, Query.limit(_STATS_PAGE_SIZE), Query.offset(offset)],
                "get_order_stats",
            )
            batch = page.get("documents", [])
            documents.extend(batch)
            if len(batch) < _STATS_PAGE_SIZE:
                break
            offset += _STATS_PAGE_SIZE
        return order_stats_from_documents(documents)

    async def cancel_order(self, order_id: str, reason: str = "") -> dict[str, Any]:
        """Mark the order cancelled; the reason is kept in notes."""
        data: dict[str, Any] = {"status": OrderStatus.CANCELLED.value}
        if reason:
            data["notes"] = f"Cancelled: {reason}"[:500]
        return await self._update_order(order_id, data, "cancel_order")

    async def search_orders(self, search_term: str, limit: int = 25) -> dict[str, Any]:
        """Full-text search on customerName (needs a fulltext index on that attribute)."""
        return await self._list_orders(
            [
                Query.search("customerName", search_term),
                Query.order_desc("$createdAt"),
                Query.limit(limit),
            ],
            "search_orders",
        )
