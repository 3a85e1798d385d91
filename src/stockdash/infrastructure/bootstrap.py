"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Repositories and the stock ledger are shared per data directory so every
handler in the process serializes on the same file and stock locks.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from stockdash.domain.service.stock_ledger import StockLedger
from stockdash.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockdash.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

DATA_DIR_ENV = "STOCKDASH_DATA_DIR"

_data_dir: Path | None = None


def set_data_dir(path: Path | None) -> None:
    """Override the data directory (``None`` restores the default)."""
    global _data_dir
    _data_dir = path.resolve() if path is not None else None


def data_dir() -> Path:
    if _data_dir is not None:
        return _data_dir
    from_env = os.environ.get(DATA_DIR_ENV)
    if from_env:
        return Path(from_env).resolve()
    return (Path.cwd() / "data").resolve()


def product_repository() -> JsonProductRepository:
    return _product_repository(data_dir() / "products.json")


def order_repository() -> JsonOrderRepository:
    return _order_repository(data_dir() / "orders.json")


def stock_ledger() -> StockLedger:
    return _stock_ledger(data_dir() / "products.json")


@lru_cache(maxsize=None)
def _product_repository(path: Path) -> JsonProductRepository:
    return JsonProductRepository(path)


@lru_cache(maxsize=None)
def _order_repository(path: Path) -> JsonOrderRepository:
    return JsonOrderRepository(path)


@lru_cache(maxsize=None)
def _stock_ledger(products_path: Path) -> StockLedger:
    return StockLedger(_product_repository(products_path))
