"""Shared table rendering for the CLI commands."""

from __future__ import annotations

from decimal import Decimal

import click

from stockdash.application.dto import OrderDTO, ProductDTO


def money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def echo_products(products: list[ProductDTO]) -> None:
    click.echo(f"{'ID':<34} {'Name':<20} {'Price':>10} {'Stock':>7} {'Min':>5}  {'Status':<12}")
    click.echo("-" * 94)
    for p in products:
        click.echo(
            f"{p.id:<34} {p.name:<20} {money(p.price):>10} {p.stock:>7} "
            f"{p.low_stock_threshold:>5}  {p.status:<12}"
        )


def echo_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{money(item.unit_price):>10} {money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {money(dto.total_price):>20}")
