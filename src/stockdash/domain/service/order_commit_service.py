"""Domain service: Order Commit.

Applies a validated order as one all-or-nothing state transition: stock
for every referenced product is decremented by its total demand and the
order record is appended, or nothing changes at all.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from stockdash.domain.exceptions import StorageError, ValidationError
from stockdash.domain.model.order import Order
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class OrderCommitService:

    def __init__(self, ledger: StockLedger, order_repo: OrderRepository) -> None:
        self._ledger = ledger
        self._order_repo = order_repo

    def commit(self, order: Order) -> Order:
        """Commit *order* and return it with its new identity.

        Duplicate product lines are summed first so each product is checked
        against its total demand.  Prices are the snapshots taken at
        validation time; they are not re-read here.
        """
        if order.is_committed:
            raise ValidationError(f"Order '{order.id}' is already committed")
        if not order.items:
            raise ValidationError("Order must contain at least one item")

        demand = order.demand_by_product()

        with self._ledger.hold(demand):
            originals = self._ledger.apply_decrements(demand)

            try:
                order.id = self._order_repo.next_id()
                order.created_at = datetime.now(timezone.utc)
                self._order_repo.add(order)
            except StorageError:
                logger.error("Could not store order %s, restoring stock", order.id)
                order.id = None
                self._ledger.restore(originals)
                raise

        logger.info(
            "Committed order %s: %d line(s), %d product(s), total %s",
            order.id, len(order.items), len(demand), order.total_price,
        )
        return order
