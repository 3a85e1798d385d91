"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain services:
the validator resolves products and freezes prices, then the commit
service re-checks stock under the per-product locks and persists the
order atomically.
"""

from __future__ import annotations

from stockdash.application.dto import OrderDTO, to_order_dto
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.order_commit_service import OrderCommitService
from stockdash.domain.service.order_validator import OrderItemSpec, OrderValidator
from stockdash.domain.service.stock_ledger import StockLedger


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Validate each line against the catalog (advisory stock check).
        2. Commit: decrement stock for every product and store the order,
           all or nothing.
        3. Return a DTO.
        """
        order = OrderValidator(self._product_repo).validate(item_specs)
        OrderCommitService(self._ledger, self._order_repo).commit(order)

        names = {}
        for product_id in order.demand_by_product():
            product = self._product_repo.get_by_id(product_id)
            if product is not None:
                names[product_id] = product.name
        return to_order_dto(order, names)
