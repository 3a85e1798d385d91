"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from stockdash.application.create_order import CreateOrderHandler
from stockdash.application.list_orders import ListOrdersHandler
from stockdash.application.show_order import ShowOrderHandler
from stockdash.domain.exceptions import DomainException
from stockdash.domain.service.order_validator import OrderItemSpec
from stockdash.infrastructure.bootstrap import (
    order_repository,
    product_repository,
    stock_ledger,
)
from stockdash.infrastructure.cli.formatting import echo_order, money
from stockdash.infrastructure.serialization import to_json


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'ID1:3,ID2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def order_create(items: str) -> None:
    """Place a new order (decrements stock)."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        ledger=stock_ledger(),
    )

    try:
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed.")
    echo_order(dto)


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def order_list(as_json: bool) -> None:
    """List all orders, most recent first."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        ledger=stock_ledger(),
    )

    try:
        orders = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(orders))
        return
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Created':<33} {'Items':>5} {'Total':>10}")
    click.echo("-" * 85)
    for o in orders:
        click.echo(f"{o.id:<34} {o.created_at:<33} {len(o.items):>5} {money(o.total_price):>10}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def order_show(order_id: str, as_json: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(dto))
        return
    echo_order(dto)
