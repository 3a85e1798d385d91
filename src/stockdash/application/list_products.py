"""Application service: List Products use case (query)."""

from __future__ import annotations

from stockdash.application.dto import ProductDTO, to_product_dto
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_ledger import StockLedger


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self) -> list[ProductDTO]:
        with self._ledger.snapshot():
            products = self._product_repo.list_all()
            return [to_product_dto(p) for p in products]
