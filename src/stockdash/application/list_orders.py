"""Application service: List Orders use case (query)."""

from __future__ import annotations

from stockdash.application.dto import OrderDTO, catalog_names, to_order_dto
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_ledger import StockLedger


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self) -> list[OrderDTO]:
        """Every order, most recent first."""
        with self._ledger.snapshot():
            orders = self._order_repo.list_all()
            names = catalog_names(self._product_repo.list_all())
            orders.sort(key=lambda o: o.created_at, reverse=True)
            return [to_order_dto(order, names) for order in orders]
