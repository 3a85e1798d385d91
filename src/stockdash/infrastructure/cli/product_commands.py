"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockdash.application.add_product import AddProductHandler
from stockdash.application.delete_product import DeleteProductHandler
from stockdash.application.list_products import ListProductsHandler
from stockdash.application.show_product import ShowProductHandler
from stockdash.application.update_product import UpdateProductHandler
from stockdash.domain.exceptions import DomainException
from stockdash.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD
from stockdash.infrastructure.bootstrap import product_repository, stock_ledger
from stockdash.infrastructure.cli.formatting import echo_products, money
from stockdash.infrastructure.serialization import to_json


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option(
    "--threshold",
    default=DEFAULT_LOW_STOCK_THRESHOLD,
    show_default=True,
    type=int,
    help="Low-stock threshold.",
)
@click.option("--description", default=None, help="Optional description.")
def product_add(
    name: str, price: str, stock: int, threshold: int, description: str | None
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            name=name,
            price=price,
            stock=stock,
            low_stock_threshold=threshold,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {money(dto.price)} ({dto.stock} in stock)")


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def product_list(as_json: bool) -> None:
    """List all products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository(), ledger=stock_ledger())

    try:
        products = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(products))
        return
    if not products:
        click.echo("No products found.")
        return
    echo_products(products)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def product_show(product_id: str, as_json: bool) -> None:
    """Show one product."""
    handler = ShowProductHandler(product_repo=product_repository(), ledger=stock_ledger())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(dto))
        return
    click.echo(f"Product #{dto.id}  {dto.name}")
    if dto.description:
        click.echo(f"  {dto.description}")
    click.echo(f"Price:     {money(dto.price)}")
    click.echo(f"Stock:     {dto.stock} (threshold {dto.low_stock_threshold})")
    click.echo(f"Status:    {dto.status} / urgency {dto.urgency}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--threshold", default=None, type=int, help="New low-stock threshold.")
def product_update(
    product_id: str,
    name: str | None,
    description: str | None,
    price: str | None,
    stock: int | None,
    threshold: int | None,
) -> None:
    """Update some fields of a product."""
    handler = UpdateProductHandler(product_repo=product_repository(), ledger=stock_ledger())

    try:
        dto = handler.handle(
            product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            low_stock_threshold=threshold,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog (existing orders are kept)."""
    handler = DeleteProductHandler(product_repo=product_repository(), ledger=stock_ledger())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")
