"""Tests for the JSON-file repositories."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from stockdash.domain.exceptions import StorageError
from stockdash.domain.model.order import Order, OrderLineItem
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import Money, Quantity
from stockdash.infrastructure.persistence.json_order_repository import JsonOrderRepository
from stockdash.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _widget(pid: str = "p1", stock: int = 10) -> Product:
    return Product.create(pid, "Widget", Money.of("15.50"), stock=stock,
                          low_stock_threshold=4, description="Blue")


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _widget()
        repo.save(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id("p1")
        assert loaded == product
        assert loaded.price.amount == Decimal("15.50")

    def test_save_replaces_existing(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_widget(stock=10))
        repo.save(_widget(stock=3))
        assert [p.stock for p in repo.list_all()] == [3]

    def test_list_keeps_insertion_order(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        for pid in ("b", "a", "c"):
            repo.save(_widget(pid))
        assert [p.id for p in repo.list_all()] == ["b", "a", "c"]

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_widget())
        assert repo.delete("p1") is True
        assert repo.delete("p1") is False
        assert repo.list_all() == []

    def test_next_id_is_unique(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        assert repo.next_id() != repo.next_id()

    def test_corrupt_file_is_a_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json")
        repo = JsonProductRepository(path)
        with pytest.raises(StorageError, match="Could not read"):
            repo.list_all()

    def test_corrupt_record_is_a_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "x", "name": "Broken"}]))
        with pytest.raises(StorageError, match="Corrupt product record"):
            JsonProductRepository(path).list_all()


class TestJsonOrderRepository:

    def _order(self, oid: str = "o1") -> Order:
        return Order(
            id=oid,
            items=[
                OrderLineItem("p1", Quantity(2), Money.of("15.50")),
                OrderLineItem("p2", Quantity(1), Money.of("0.99")),
            ],
            total_price=Money.of("31.99"),
            created_at=datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc),
        )

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        repo.add(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id("o1")
        assert loaded == order

    def test_amounts_stored_as_strings(self, tmp_path):
        path = tmp_path / "orders.json"
        JsonOrderRepository(path).add(self._order())
        [raw] = json.loads(path.read_text())
        assert raw["total_price"] == "31.99"
        assert raw["items"][1] == {
            "product_id": "p2", "quantity": 1, "unit_price": "0.99", "currency": "USD",
        }

    def test_orders_are_append_only(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(self._order())
        with pytest.raises(StorageError, match="already stored"):
            repo.add(self._order())

    def test_uncommitted_order_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order()
        order.id = None
        with pytest.raises(StorageError):
            repo.add(order)

    def test_list_all(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.add(self._order("o1"))
        repo.add(self._order("o2"))
        assert [o.id for o in repo.list_all()] == ["o1", "o2"]
        assert repo.get_by_id("o3") is None
