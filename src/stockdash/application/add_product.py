"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal

from stockdash.application.dto import ProductDTO, to_product_dto
from stockdash.domain.exceptions import ValidationError
from stockdash.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from stockdash.domain.model.value_objects import Money
from stockdash.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str | int | float | Decimal | None,
        stock: int | None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        description: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if price is None:
            raise ValidationError("Product price is required")
        if stock is None:
            raise ValidationError("Product stock is required")

        product = Product.create(
            product_id=self._product_repo.next_id(),
            name=name,
            price=Money.of(price),
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            description=description,
        )
        self._product_repo.save(product)
        logger.info("Added product %s '%s' (stock %d)", product.id, product.name, product.stock)
        return to_product_dto(product)
