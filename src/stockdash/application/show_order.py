"""Application service: Show Order use case (query)."""

from __future__ import annotations

from stockdash.application.dto import OrderDTO, to_order_dto
from stockdash.domain.exceptions import OrderNotFoundError
from stockdash.domain.repository.order_repository import OrderRepository
from stockdash.domain.repository.product_repository import ProductRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        names = {}
        for item in order.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is not None:
                names[item.product_id] = product.name
        return to_order_dto(order, names)
