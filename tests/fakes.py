"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import itertools
import threading
import time

from stockdash.domain.exceptions import StorageError
from stockdash.domain.model.order import Order
from stockdash.domain.model.product import Product
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        for o in orders or []:
            self._store[o.id] = o

    def next_id(self) -> str:
        with self._lock:
            return f"ord-{next(self._ids)}"

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def add(self, order: Order) -> None:
        self._store[order.id] = order


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        for p in products or []:
            self._store[p.id] = p

    def next_id(self) -> str:
        with self._lock:
            return f"prod-{next(self._ids)}"

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def delete(self, product_id: str) -> bool:
        return self._store.pop(product_id, None) is not None


class SlowProductRepository(FakeProductRepository):
    """Sleeps on every read to widen the window between check and write."""

    def __init__(self, products: list[Product] | None = None, delay: float = 0.01) -> None:
        super().__init__(products)
        self._delay = delay

    def get_by_id(self, product_id: str) -> Product | None:
        time.sleep(self._delay)
        return super().get_by_id(product_id)


class FailingOrderRepository(FakeOrderRepository):
    """Refuses to store any order."""

    def add(self, order: Order) -> None:
        raise StorageError("order store unavailable")


class FlakyProductRepository(FakeProductRepository):
    """Fails the n-th call to ``save`` and succeeds on all others."""

    def __init__(self, products: list[Product] | None = None, fail_on_save: int = 1) -> None:
        super().__init__(products)
        self._fail_on_save = fail_on_save
        self.save_calls = 0

    def save(self, product: Product) -> None:
        self.save_calls += 1
        if self.save_calls == self._fail_on_save:
            raise StorageError("product store unavailable")
        super().save(product)


class StallingOrderRepository(FakeOrderRepository):
    """Signals when ``add`` starts, stalls, then refuses the order."""

    def __init__(self, delay: float = 0.3) -> None:
        super().__init__()
        self._delay = delay
        self.add_started = threading.Event()

    def add(self, order: Order) -> None:
        self.add_started.set()
        time.sleep(self._delay)
        raise StorageError("order store unavailable")
