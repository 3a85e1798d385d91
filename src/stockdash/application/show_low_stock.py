"""Application service: Low Stock report (query).

Lists every product at or below its threshold, most urgent first, with
the per-tier counts shown on the restocking page.
"""

from __future__ import annotations

from stockdash.application.dto import LowStockReportDTO, to_product_dto
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_classifier import (
    Urgency,
    needs_restock,
    sort_by_urgency,
)
from stockdash.domain.service.stock_ledger import StockLedger


class LowStockReportHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self) -> LowStockReportDTO:
        with self._ledger.snapshot():
            products = self._product_repo.list_all()
            flagged = sort_by_urgency(p for p in products if needs_restock(p))
            rows = [to_product_dto(p) for p in flagged]

        tiers = [Urgency(row.urgency) for row in rows]
        return LowStockReportDTO(
            products=rows,
            critical_count=tiers.count(Urgency.CRITICAL),
            high_count=tiers.count(Urgency.HIGH),
            medium_count=tiers.count(Urgency.MEDIUM),
            total_count=len(rows),
        )
