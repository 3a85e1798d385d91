"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is counted down by orders and topped up by restocks,
and products are added and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockdash.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    StockShortage,
    ValidationError,
)
from stockdash.domain.model.value_objects import Money, require_stock_level

DEFAULT_LOW_STOCK_THRESHOLD = 10


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog, carrying its own stock count.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is never negative (enforced by Money)

    Use ``Product.create()`` for new products; ``__init__`` stays simple
    so the repository can reconstitute persisted products.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    description: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        stock: int,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        description: str | None = None,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        now = _now()
        return Product(
            id=product_id,
            name=_clean_name(name),
            price=price,
            stock=require_stock_level(stock, "Stock"),
            low_stock_threshold=require_stock_level(
                low_stock_threshold, "Low-stock threshold"
            ),
            description=(description or "").strip(),
            created_at=now,
            updated_at=now,
        )

    # --- Mutations ------------------------------------------------------------

    def rename(self, name: str) -> None:
        self.name = _clean_name(name)
        self._touch()

    def describe(self, description: str | None) -> None:
        self.description = (description or "").strip()
        self._touch()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price
        self._touch()

    def set_low_stock_threshold(self, value: int) -> None:
        self.low_stock_threshold = require_stock_level(value, "Low-stock threshold")
        self._touch()

    def set_stock(self, value: int) -> None:
        """Overwrite the stock count (restock or manual correction)."""
        self.stock = require_stock_level(value, "Stock")
        self._touch()

    def remove_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError if fewer units are available.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        if quantity > self.stock:
            raise InsufficientStockError(
                [StockShortage(self.id, self.name, quantity, self.stock)]
            )
        self.stock -= quantity
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _now()


def _clean_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Product name is required")
    return name.strip()
