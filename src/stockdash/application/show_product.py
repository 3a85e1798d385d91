"""Application service: Show Product use case (query)."""

from __future__ import annotations

from stockdash.application.dto import ProductDTO, to_product_dto
from stockdash.domain.exceptions import ProductNotFoundError
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_ledger import StockLedger


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, product_id: str) -> ProductDTO:
        # Waits for an in-flight commit on this product to append or roll back.
        with self._ledger.hold([product_id]):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            return to_product_dto(product)
