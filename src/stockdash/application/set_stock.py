"""Application service: Set Stock use case (restock or manual correction)."""

from __future__ import annotations

from stockdash.application.dto import ProductDTO, to_product_dto
from stockdash.domain.service.stock_ledger import StockLedger


class SetStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(self, product_id: str, stock: int) -> ProductDTO:
        """Set the stock level of a product; negative values are rejected."""
        product = self._ledger.set_stock(product_id, stock)
        return to_product_dto(product)
