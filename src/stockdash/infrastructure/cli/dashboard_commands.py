"""CLI command for the dashboard summary."""

from __future__ import annotations

import click

from stockdash.application.dashboard_stats import GetDashboardStatsHandler
from stockdash.domain.exceptions import DomainException
from stockdash.infrastructure.bootstrap import order_repository, product_repository, stock_ledger
from stockdash.infrastructure.cli.formatting import money
from stockdash.infrastructure.serialization import to_json


@click.command("dashboard")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON.")
def dashboard(as_json: bool) -> None:
    """Show catalog and order totals, recent orders and low stock."""
    handler = GetDashboardStatsHandler(
        product_repo=product_repository(),
        order_repo=order_repository(),
        ledger=stock_ledger(),
    )

    try:
        stats = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(to_json(stats))
        return

    click.echo(f"Products:   {stats.total_products}")
    click.echo(f"Orders:     {stats.total_orders}")
    click.echo(f"Low stock:  {stats.low_stock_count}")

    click.echo()
    click.echo("Recent orders")
    if not stats.recent_orders:
        click.echo("  No orders yet.")
    for o in stats.recent_orders:
        click.echo(f"  #{o.id[-6:]}  {o.created_at}  {len(o.items)} item(s)  {money(o.total_price)}")

    click.echo()
    click.echo("Low stock")
    if not stats.low_stock_products:
        click.echo("  All products are well stocked!")
    for p in stats.low_stock_products:
        click.echo(f"  {p.name:<20} {p.stock} left")
