"""Low-stock classification.

Pure functions deriving a product's stock status and restocking urgency
from its stock count and low-stock threshold.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from stockdash.domain.model.product import Product


class StockStatus(Enum):
    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


class Urgency(Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    NONE = "NONE"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]


_URGENCY_RANK = {
    Urgency.CRITICAL: 0,
    Urgency.HIGH: 1,
    Urgency.MEDIUM: 2,
    Urgency.NONE: 3,
}


@dataclass(frozen=True)
class StockAssessment:
    status: StockStatus
    urgency: Urgency

    @property
    def needs_restock(self) -> bool:
        return self.status != StockStatus.IN_STOCK


def classify(stock: int, low_stock_threshold: int) -> StockAssessment:
    """Classify a stock level against its threshold.

    ``stock == 0`` is out of stock; up to half the threshold (floored) is
    high urgency; up to the threshold itself is medium.
    """
    if stock == 0:
        return StockAssessment(StockStatus.OUT_OF_STOCK, Urgency.CRITICAL)
    if stock <= low_stock_threshold // 2:
        return StockAssessment(StockStatus.LOW_STOCK, Urgency.HIGH)
    if stock <= low_stock_threshold:
        return StockAssessment(StockStatus.LOW_STOCK, Urgency.MEDIUM)
    return StockAssessment(StockStatus.IN_STOCK, Urgency.NONE)


def assess(product: Product) -> StockAssessment:
    return classify(product.stock, product.low_stock_threshold)


def needs_restock(product: Product) -> bool:
    return assess(product).needs_restock


def sort_by_urgency(products: Iterable[Product]) -> list[Product]:
    """Most urgent first; ties broken by stock, then name."""
    return sorted(
        products,
        key=lambda p: (assess(p).urgency.rank, p.stock, p.name),
    )
