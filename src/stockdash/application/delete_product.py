"""Application service: Delete Product use case.

Orders referencing the product are left exactly as they are; their line
items keep the price and quantity snapshot.
"""

from __future__ import annotations

import logging

from stockdash.domain.exceptions import ProductNotFoundError
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, product_id: str) -> None:
        with self._ledger.hold([product_id]):
            if not self._product_repo.delete(product_id):
                raise ProductNotFoundError(product_id)
        logger.info("Deleted product %s", product_id)
