"""CLI commands for the Stock Ledger."""

from __future__ import annotations

import click

from stockroom.application.add_stock_entry import AddStockEntryHandler
from stockroom.application.delete_product import DeleteProductHandler
from stockroom.application.dto import ProductDTO
from stockroom.application.show_stock import ShowStockHandler
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.cli.context import pass_services, run


def _display_stock(products: list[ProductDTO]) -> None:
    click.echo(
        f"{'ID':<18} {'Type':<10} {'Name':<16} {'Qty':>5} {'Owner':<10} {'Expires':<10}"
    )
    click.echo("-" * 74)
    for p in products:
        click.echo(
            f"{p.id:<18} {p.type:<10} {p.name:<16} {p.quantity:>5} {p.owner:<10} {p.expiry_date:<10}"
        )


@click.command("list")
@click.option("--owner", default=None, help="Only show entries recorded by this user.")
@pass_services
def stock_list(services: Services, owner: str | None) -> None:
    """List items available in stock."""
    handler = ShowStockHandler(coordinator=services.coordinator)
    products = run(services, lambda: handler.handle(owner=owner))

    if not products:
        click.echo("No stock entries found.")
        return
    _display_stock(products)


@click.command("add")
@click.option("--type", "type_", default="", help="Category, e.g. Dairy.")
@click.option("--name", required=True, help="Product name.")
@click.option("--quantity", required=True, help="Number of units.")
@click.option("--expiry", required=True, help="Expiry date as YYYY-MM-DD.")
@pass_services
def stock_add(services: Services, type_: str, name: str, quantity: str, expiry: str) -> None:
    """Record new stock under the logged-in user."""
    handler = AddStockEntryHandler(
        coordinator=services.coordinator,
        gate=services.gate,
        clock=services.clock,
    )
    session = services.sessions.load()
    product = run(
        services,
        lambda: handler.handle(session, type=type_, name=name, quantity=quantity, expiry_date=expiry),
    )
    click.echo(f"'{product.name}' by {product.owner} now has {product.quantity} in stock (id {product.id})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID to delete.")
@pass_services
def stock_delete(services: Services, product_id: str) -> None:
    """Delete a product from stock (admin only)."""
    handler = DeleteProductHandler(coordinator=services.coordinator, gate=services.gate)
    session = services.sessions.load()
    run(services, lambda: handler.handle(session, product_id))
    click.echo(f"Product {product_id} deleted.")


@click.command("fix-quantities")
@pass_services
def stock_fix_quantities(services: Services) -> None:
    """Rewrite malformed stored quantities as integers."""
    corrected = run(services, services.stock.correct_quantities)
    click.echo(f"Corrected {corrected} stock entries.")
