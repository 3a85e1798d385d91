"""CLI commands for stock levels."""

from __future__ import annotations

import click

from stockdash.application.set_stock import SetStockHandler
from stockdash.application.show_low_stock import LowStockReportHandler
from stockdash.domain.exceptions import DomainException
from stockdash.infrastructure.bootstrap import product_repository, stock_ledger
from stockdash.infrastructure.serialization import to_json


@click.command("set")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New number of units in stock.")
def stock_set(product_id: str, quantity: int) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(ledger=stock_ledger())

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{dto.name}' set to {dto.stock}")


@click.command("low")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def stock_low(as_json: bool) -> None:
    """Show products at or below their low-stock threshold, most urgent first."""
    handler = LowStockReportHandler(product_repo=product_repository(), ledger=stock_ledger())

    try:
        report = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(report))
        return
    if not report.products:
        click.echo("All products are well stocked.")
        return

    click.echo(
        f"Critical: {report.critical_count}  High: {report.high_count}  "
        f"Medium: {report.medium_count}  Total: {report.total_count}"
    )
    click.echo()
    click.echo(f"{'Product':<20} {'Stock':>7} {'Min':>5}  {'Urgency':<8}")
    click.echo("-" * 44)
    for p in report.products:
        click.echo(f"{p.name:<20} {p.stock:>7} {p.low_stock_threshold:>5}  {p.urgency:<8}")
