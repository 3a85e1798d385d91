"""Domain service: Order Validation.

Checks a proposed order against the catalog before it is committed and
freezes the unit prices into line items.  The stock check here is an
early hint for the user only; ``OrderCommitService`` repeats it under the
stock locks with the real cumulative demand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stockdash.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    StockShortage,
    ValidationError,
)
from stockdash.domain.model.order import Order, OrderLineItem
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import Quantity
from stockdash.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


class OrderValidator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate(self, item_specs: list[OrderItemSpec]) -> Order:
        """Return an uncommitted Order with price snapshots and its total.

        Lines are checked one by one against a single read of each product;
        lines naming the same product are not merged here.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        seen: dict[str, Product] = {}
        line_items: list[OrderLineItem] = []

        for spec in item_specs:
            if not isinstance(spec.product_id, str) or not spec.product_id.strip():
                raise ValidationError("Every order line needs a product ID")

            product = seen.get(spec.product_id)
            if product is None:
                product = self._product_repo.get_by_id(spec.product_id)
                if product is None:
                    raise ProductNotFoundError(spec.product_id)
                seen[spec.product_id] = product

            quantity = Quantity(spec.quantity)
            if quantity.value > product.stock:
                raise InsufficientStockError(
                    [StockShortage(product.id, product.name, quantity.value, product.stock)]
                )

            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=product.price,  # <-- price snapshot
                )
            )

        order = Order.create(line_items)
        logger.debug("Validated order with %d line(s), total %s", len(line_items), order.total_price)
        return order
