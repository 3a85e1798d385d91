"""Application service: Update Product use case.

Applies a partial update.  Every supplied field is validated before any
of them is applied, so a rejected update leaves the product untouched.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from stockdash.application.dto import ProductDTO, to_product_dto
from stockdash.domain.exceptions import ProductNotFoundError, ValidationError
from stockdash.domain.model.value_objects import Money, require_stock_level
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.domain.service.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        description: str | None = None,
        price: str | int | float | Decimal | None = None,
        stock: int | None = None,
        low_stock_threshold: int | None = None,
    ) -> ProductDTO:
        """Update the given fields of a product; ``None`` means unchanged.

        Price changes do NOT affect existing orders; they captured a
        price snapshot at creation time.
        """
        if name is not None and not name.strip():
            raise ValidationError("Product name is required")
        new_price = Money.of(price) if price is not None else None
        if stock is not None:
            require_stock_level(stock, "Stock")
        if low_stock_threshold is not None:
            require_stock_level(low_stock_threshold, "Low-stock threshold")

        with self._ledger.hold([product_id]):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if name is not None:
                product.rename(name)
            if description is not None:
                product.describe(description)
            if new_price is not None:
                product.update_price(new_price)
            if stock is not None:
                product.set_stock(stock)
            if low_stock_threshold is not None:
                product.set_low_stock_threshold(low_stock_threshold)

            self._product_repo.save(product)

        logger.info("Updated product %s", product_id)
        return to_product_dto(product)
