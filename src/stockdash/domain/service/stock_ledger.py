"""Domain service: Stock Ledger.

The ledger is the only writer of product stock.  Every product mutation
goes through ``hold()``, which takes one lock per product id in sorted
order, so two commits competing for the last units of a product are
serialized and multi-product commits cannot deadlock.

Commits also take the shared side of a gate whose exclusive side is used
by ``snapshot()``: read-side queries wait until in-flight commits have
both decremented stock and appended their order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from stockdash.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    StockShortage,
    StorageError,
)
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import require_stock_level
from stockdash.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class _SharedExclusiveGate:
    """Many shared holders or one exclusive holder.

    Shared acquisition is reentrant per thread.  Waiting exclusive
    holders block new shared holders so snapshots are not starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._shared = 0
        self._exclusive = False
        self._exclusive_waiting = 0
        self._local = threading.local()

    @contextmanager
    def shared(self) -> Iterator[None]:
        depth = getattr(self._local, "depth", 0)
        if depth == 0:
            with self._cond:
                while self._exclusive or self._exclusive_waiting:
                    self._cond.wait()
                self._shared += 1
        self._local.depth = depth + 1
        try:
            yield
        finally:
            self._local.depth = depth
            if depth == 0:
                with self._cond:
                    self._shared -= 1
                    if self._shared == 0:
                        self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._exclusive_waiting += 1
            try:
                while self._exclusive or self._shared:
                    self._cond.wait()
            finally:
                self._exclusive_waiting -= 1
            self._exclusive = True
        try:
            yield
        finally:
            with self._cond:
                self._exclusive = False
                self._cond.notify_all()


class StockLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        self._gate = _SharedExclusiveGate()

    # --- Locking ----------------------------------------------------------------

    @contextmanager
    def hold(self, product_ids: Iterable[str]) -> Iterator[None]:
        """Hold the locks of every given product for the duration of the block.

        Locks are acquired in sorted id order.  Nesting is allowed for the
        same or a subset of the ids already held.
        """
        ids = sorted(set(product_ids))
        with self._gate.shared():
            acquired: list[threading.RLock] = []
            try:
                for product_id in ids:
                    lock = self._lock_for(product_id)
                    lock.acquire()
                    acquired.append(lock)
                logger.debug("Holding stock locks for %s", ids)
                yield
            finally:
                for lock in reversed(acquired):
                    lock.release()

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        """Block commits while a consistent read of products and orders is taken."""
        with self._gate.exclusive():
            yield

    def _lock_for(self, product_id: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[product_id] = lock
            return lock

    # --- Single-product operations ----------------------------------------------

    def get_stock(self, product_id: str) -> int:
        with self.hold([product_id]):
            return self._require(product_id).stock

    def set_stock(self, product_id: str, new_value: int) -> Product:
        """Overwrite a product's stock; negative targets are rejected."""
        require_stock_level(new_value, "Stock")
        with self.hold([product_id]):
            product = self._require(product_id)
            previous = product.stock
            product.set_stock(new_value)
            self._product_repo.save(product)
        logger.info("Stock of %s set from %d to %d", product_id, previous, new_value)
        return product

    def decrement(self, product_id: str, amount: int) -> Product:
        """Atomically take *amount* units out of one product's stock."""
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        with self.hold([product_id]):
            product = self._require(product_id)
            product.remove_stock(amount)
            self._product_repo.save(product)
        return product

    # --- Order-level operations -------------------------------------------------

    def apply_decrements(self, demand: dict[str, int]) -> list[Product]:
        """Decrement every product in *demand*, or none of them.

        Uses a two-phase approach:
          Phase 1: load and check every product against its total demand,
                   collecting all shortages.  Fails before any mutation.
          Phase 2: mutate and persist.  If a write fails, products already
                   written are restored before the error propagates.

        Returns copies of the products as they were before the call, which
        ``restore()`` accepts to undo the decrement.
        """
        for quantity in demand.values():
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                raise InvalidQuantityError("Quantity must be positive")

        with self.hold(demand):
            # Phase 1: load everything and check
            loaded: list[tuple[Product, int]] = []
            shortages: list[StockShortage] = []
            for product_id in sorted(demand):
                product = self._require(product_id)
                quantity = demand[product_id]
                if quantity > product.stock:
                    shortages.append(
                        StockShortage(product.id, product.name, quantity, product.stock)
                    )
                loaded.append((product, quantity))

            if shortages:
                logger.warning(
                    "Rejected decrement, insufficient stock: %s",
                    ", ".join(str(s) for s in shortages),
                )
                raise InsufficientStockError(shortages)

            # Phase 2: mutate and persist
            originals = [replace(product) for product, _ in loaded]
            try:
                for product, quantity in loaded:
                    product.remove_stock(quantity)
                    self._product_repo.save(product)
            except StorageError:
                logger.error("Storage failed mid-decrement, restoring %d product(s)",
                             len(loaded))
                self.restore(originals)
                raise
            return originals

    def restore(self, originals: list[Product]) -> None:
        """Write back product snapshots taken by ``apply_decrements``.

        Only stock and ``updated_at`` are reverted, on the stored product
        itself, so repositories that hand out live instances stay coherent.
        """
        with self.hold(p.id for p in originals):
            for original in originals:
                current = self._product_repo.get_by_id(original.id)
                if current is None:
                    current = replace(original)
                current.stock = original.stock
                current.updated_at = original.updated_at
                try:
                    self._product_repo.save(current)
                except StorageError:
                    logger.exception("Could not restore stock of %s", original.id)

    # --- Internal helpers ---------------------------------------------------------

    def _require(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
