"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from stockdash.domain.exceptions import DomainException, StorageError
from stockdash.domain.model.order import Order, OrderLineItem
from stockdash.domain.model.value_objects import Money, Quantity
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.read():
            if raw.get("id") == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def add(self, order: Order) -> None:
        if order.id is None:
            raise StorageError("Cannot store an order without an ID")
        with self._file.lock:
            records = self._file.read()
            if any(raw.get("id") == order.id for raw in records):
                raise StorageError(f"Order '{order.id}' is already stored")
            records.append(self._to_raw(order))
            self._file.write(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "created_at": order.created_at.isoformat(),
            "total_price": str(order.total_price.amount),
            "currency": order.total_price.currency,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    def _to_domain(self, raw: dict) -> Order:
        try:
            items = [
                OrderLineItem(
                    product_id=i["product_id"],
                    quantity=Quantity(i["quantity"]),
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                )
                for i in raw["items"]
            ]
            return Order(
                id=raw["id"],
                items=items,
                total_price=Money(Decimal(raw["total_price"]), raw.get("currency", "USD")),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise StorageError(
                f"Corrupt order record in {self._file.path.name}: {raw!r}"
            ) from exc
