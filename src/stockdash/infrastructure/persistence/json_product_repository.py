"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from stockdash.domain.exceptions import DomainException, StorageError
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import Money
from stockdash.domain.repository.product_repository import ProductRepository
from stockdash.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read():
            if raw.get("id") == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, product: Product) -> None:
        with self._file.lock:
            records = self._file.read()

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw.get("id") == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

            self._file.write(records)

    def delete(self, product_id: str) -> bool:
        with self._file.lock:
            records = self._file.read()
            remaining = [raw for raw in records if raw.get("id") != product_id]
            if len(remaining) == len(records):
                return False
            self._file.write(remaining)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "low_stock_threshold": product.low_stock_threshold,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    def _to_domain(self, raw: dict) -> Product:
        try:
            return Product(
                id=raw["id"],
                name=raw["name"],
                description=raw.get("description", ""),
                price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
                stock=raw["stock"],
                low_stock_threshold=raw["low_stock_threshold"],
                created_at=datetime.fromisoformat(raw["created_at"]),
                updated_at=datetime.fromisoformat(raw["updated_at"]),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise StorageError(
                f"Corrupt product record in {self._file.path.name}: {raw!r}"
            ) from exc
