from __future__ import annotations

from pathlib import Path

import click

from stockdash.infrastructure.bootstrap import DATA_DIR_ENV, set_data_dir
from stockdash.infrastructure.cli.dashboard_commands import dashboard
from stockdash.infrastructure.cli.order_commands import order_create, order_list, order_show
from stockdash.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from stockdash.infrastructure.cli.stock_commands import stock_low, stock_set
from stockdash.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help="Directory holding products.json and orders.json (default: ./data).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(data_dir: Path | None, verbose: bool) -> None:
    """stockdash: inventory and order dashboard"""
    configure_logging(verbose)
    set_data_dir(data_dir)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Restock products and watch low stock."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
stock.add_command(stock_low)
stock.add_command(stock_set)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
cli.add_command(dashboard)
