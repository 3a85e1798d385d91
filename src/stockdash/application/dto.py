"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money leaves the core as
Decimal rounded to the currency's minor unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockdash.domain.model.order import Order
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import Money
from stockdash.domain.service.stock_classifier import assess

UNKNOWN_PRODUCT = "Unknown product"


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: Decimal
    stock: int
    low_stock_threshold: int
    status: str
    urgency: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str  # resolved at read time, UNKNOWN_PRODUCT if deleted
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    items: list[OrderLineItemDTO]
    total_price: Decimal
    created_at: str


@dataclass(frozen=True)
class LowStockReportDTO:
    products: list[ProductDTO]  # most urgent first
    critical_count: int
    high_count: int
    medium_count: int
    total_count: int


@dataclass(frozen=True)
class DashboardStatsDTO:
    total_products: int
    total_orders: int
    low_stock_count: int
    recent_orders: list[OrderDTO]
    low_stock_products: list[ProductDTO]


# --- Mapping ------------------------------------------------------------------


def _amount(money: Money) -> Decimal:
    return money.rounded().amount


def to_product_dto(product: Product) -> ProductDTO:
    assessment = assess(product)
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=_amount(product.price),
        stock=product.stock,
        low_stock_threshold=product.low_stock_threshold,
        status=assessment.status.value,
        urgency=assessment.urgency.value,
        created_at=product.created_at.isoformat(),
        updated_at=product.updated_at.isoformat(),
    )


def to_order_dto(order: Order, product_names: dict[str, str]) -> OrderDTO:
    """Map an order, naming each line from the current catalog."""
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=product_names.get(item.product_id, UNKNOWN_PRODUCT),
                quantity=item.quantity.value,
                unit_price=_amount(item.unit_price),
                line_total=_amount(item.line_total),
            )
            for item in order.items
        ],
        total_price=_amount(order.total_price),
        created_at=order.created_at.isoformat(),
    )


def catalog_names(products: list[Product]) -> dict[str, str]:
    return {p.id: p.name for p in products}
