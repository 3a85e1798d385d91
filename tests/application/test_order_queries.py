"""Integration tests for the order queries (list / show)."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stockdash.application.create_order import CreateOrderHandler
from stockdash.application.delete_product import DeleteProductHandler
from stockdash.application.dto import UNKNOWN_PRODUCT
from stockdash.application.list_orders import ListOrdersHandler
from stockdash.application.show_order import ShowOrderHandler
from stockdash.domain.exceptions import OrderNotFoundError
from stockdash.domain.model.order import Order, OrderLineItem
from stockdash.domain.model.product import Product
from stockdash.domain.model.value_objects import Money, Quantity
from stockdash.domain.service.order_validator import OrderItemSpec
from stockdash.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup():
    product_repo = FakeProductRepository([
        Product(id="1", name="Widget", price=Money.of("15.00"), stock=20),
        Product(id="2", name="Gadget", price=Money.of("4.25"), stock=20),
    ])
    order_repo = FakeOrderRepository()
    ledger = StockLedger(product_repo)
    return product_repo, order_repo, ledger


class TestListOrders:

    def test_newest_first(self):
        product_repo, _, ledger = _setup()
        t0 = datetime(2024, 5, 1, tzinfo=timezone.utc)
        orders = [
            Order(id=f"o{n}", items=[OrderLineItem("1", Quantity(1), Money.of("15.00"))],
                  total_price=Money.of("15.00"), created_at=t0 + timedelta(minutes=n))
            for n in (2, 3, 1)
        ]
        handler = ListOrdersHandler(FakeOrderRepository(orders), product_repo, ledger)
        assert [o.id for o in handler.handle()] == ["o3", "o2", "o1"]

    def test_deleted_product_shows_as_unknown(self):
        product_repo, order_repo, ledger = _setup()
        created = CreateOrderHandler(order_repo, product_repo, ledger).handle(
            [OrderItemSpec("1", 2), OrderItemSpec("2", 4)]
        )
        snapshot = [(i.product_id, i.quantity.value, i.unit_price)
                    for i in order_repo.get_by_id(created.id).items]

        DeleteProductHandler(product_repo, ledger).handle("1")

        [listed] = ListOrdersHandler(order_repo, product_repo, ledger).handle()
        assert [i.product_name for i in listed.items] == [UNKNOWN_PRODUCT, "Gadget"]
        assert listed.items[0].unit_price == Decimal("15.00")
        assert listed.items[0].quantity == 2
        assert listed.total_price == Decimal("47.00")
        assert [(i.product_id, i.quantity.value, i.unit_price)
                for i in order_repo.get_by_id(created.id).items] == snapshot


class TestShowOrder:

    def test_show(self):
        product_repo, order_repo, ledger = _setup()
        created = CreateOrderHandler(order_repo, product_repo, ledger).handle(
            [OrderItemSpec("2", 2)]
        )
        dto = ShowOrderHandler(order_repo, product_repo).handle(created.id)
        assert dto == created

    def test_show_missing(self):
        product_repo, order_repo, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            ShowOrderHandler(order_repo, product_repo).handle("nope")
