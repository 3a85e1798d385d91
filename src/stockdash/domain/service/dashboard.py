"""Dashboard aggregation: a read-side projection over products and orders.

Nothing is cached; the statistics are recomputed from whatever snapshot
the caller passes in.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockdash.domain.model.order import Order
from stockdash.domain.model.product import Product
from stockdash.domain.service.stock_classifier import needs_restock

RECENT_ORDER_LIMIT = 5


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    total_orders: int
    low_stock_count: int
    recent_orders: list[Order]
    low_stock_products: list[Product]


def aggregate(products: list[Product], orders: list[Order]) -> DashboardStats:
    low_stock = [p for p in products if needs_restock(p)]
    recent = sorted(orders, key=lambda o: o.created_at, reverse=True)
    return DashboardStats(
        total_products=len(products),
        total_orders=len(orders),
        low_stock_count=len(low_stock),
        recent_orders=recent[:RECENT_ORDER_LIMIT],
        low_stock_products=low_stock,
    )
