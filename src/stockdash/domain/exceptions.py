"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every failure leaves stock and orders exactly as they were before the call.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A quantity was zero/negative, or a stock target was negative."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order '{order_id}' not found")
        self.order_id = order_id


class StorageError(DomainException):
    """The underlying store could not be read or written.

    Transient from the caller's point of view; the core never retries.
    """


@dataclass(frozen=True)
class StockShortage:
    """One product that could not cover its requested quantity."""

    product_id: str
    product_name: str
    requested: int
    available: int

    @property
    def shortfall(self) -> int:
        return self.requested - self.available

    def __str__(self) -> str:
        return (
            f"{self.product_name} (need {self.requested}, "
            f"have {self.available} available)"
        )


class InsufficientStockError(DomainException):
    """Requested quantities exceed available stock for one or more products."""

    def __init__(self, shortages: list[StockShortage]) -> None:
        self.shortages = list(shortages)
        details = ", ".join(str(s) for s in self.shortages)
        super().__init__(f"Insufficient stock for {details}")

    @property
    def product_ids(self) -> list[str]:
        return [s.product_id for s in self.shortages]
