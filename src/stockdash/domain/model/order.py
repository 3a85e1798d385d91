"""Order aggregate.

The Order owns its line items. Orders are immutable once committed: there
is no update or cancel, and line prices are frozen at validation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockdash.domain.exceptions import ValidationError
from stockdash.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time.

    ``product_id`` is a weak reference: the product may be deleted later
    without touching this record.
    """

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at validation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    items: list[OrderLineItem]
    total_price: Money
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(items: list[OrderLineItem]) -> Order:
        """Create a new, not yet committed order."""
        if not items:
            raise ValidationError("Order must contain at least one item")
        return Order(id=None, items=list(items), total_price=compute_total(items))

    @property
    def is_committed(self) -> bool:
        return self.id is not None

    def demand_by_product(self) -> dict[str, int]:
        """Total requested quantity per product, duplicate lines summed."""
        demand: dict[str, int] = {}
        for item in self.items:
            demand[item.product_id] = demand.get(item.product_id, 0) + item.quantity.value
        return demand


def compute_total(items: list[OrderLineItem]) -> Money:
    """Sum of price x quantity, rounded to the currency's minor unit."""
    result = Money.zero()
    for item in items:
        result = result + item.line_total
    return result.rounded()
