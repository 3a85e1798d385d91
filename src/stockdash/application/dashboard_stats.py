"""Application service: Dashboard statistics (query)."""

from __future__ import annotations

from stockdash.application.dto import (
    DashboardStatsDTO,
    catalog_names,
    to_order_dto,
    to_product_dto,
)
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.dashboard import aggregate
from stockdash.domain.service.stock_ledger import StockLedger


class GetDashboardStatsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        ledger: StockLedger,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._ledger = ledger

    def handle(self) -> DashboardStatsDTO:
        # Products and orders are read together so a commit in flight is
        # either fully visible or not at all.
        with self._ledger.snapshot():
            products = self._product_repo.list_all()
            orders = self._order_repo.list_all()
            stats = aggregate(products, orders)
            names = catalog_names(products)
            return DashboardStatsDTO(
                total_products=stats.total_products,
                total_orders=stats.total_orders,
                low_stock_count=stats.low_stock_count,
                recent_orders=[to_order_dto(o, names) for o in stats.recent_orders],
                low_stock_products=[to_product_dto(p) for p in stats.low_stock_products],
            )
