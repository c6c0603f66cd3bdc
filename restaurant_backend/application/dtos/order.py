"""DTOs for order use cases (field names map to the orders / orderItems attributes)."""

from dataclasses import dataclass, field
from typing import Any

from restaurant_backend.domain.enums import OrderType


@dataclass(frozen=True)
class OrderCreate:
    """Input for creating an order. Status and payment status start as pending."""

    customer_id: str
    customer_name: str
    order_type: OrderType
    subtotal: float
    tax: float
    total: float
    customer_phone: str | None = None
    customer_email: str | None = None
    table_number: int | None = None
    tip: float = 0.0
    payment_method: str | None = None
    notes: str | None = None
    estimated_time: int | None = None


@dataclass(frozen=True)
class OrderItemCreate:
    """One line of an order; total price is computed as quantity * unit_price."""

    menu_item_id: str
    menu_item_name: str
    quantity: int
    unit_price: float
    special_instructions: str | None = None


@dataclass(frozen=True)
class OrderStats:
    """Aggregates over a set of orders."""

    total_orders: int
    total_revenue: float
    average_order_value: float
    orders_by_status: dict[str, int] = field(default_factory=dict)
    orders_by_type: dict[str, int] = field(default_factory=dict)


def order_stats_from_documents(documents: list[dict[str, Any]]) -> OrderStats:
    """Compute OrderStats from order documents."""
    by_status: dict[str, int] = {}
    by_type: dict[str, int] = {}
    revenue = 0.0
    for order in documents:
        revenue += float(order.get("total") or 0)
        status = order.get("status") or "unknown"
        order_type = order.get("orderType") or "unknown"
        by_status[status] = by_status.get(status, 0) + 1
        by_type[order_type] = by_type.get(order_type, 0) + 1
    count = len(documents)
    return OrderStats(
        total_orders=count,
        total_revenue=round(revenue, 2),
        average_order_value=round(revenue / count, 2) if count else 0.0,
        orders_by_status=by_status,
        orders_by_type=by_type,
    )
