"""CLI commands for the basket and checkout."""

from __future__ import annotations

import click

from stockroom.application.add_to_basket import AddToBasketHandler
from stockroom.application.confirm_purchase import ConfirmPurchaseHandler
from stockroom.application.dto import BasketEntryDTO
from stockroom.application.return_to_stock import ReturnToStockHandler
from stockroom.application.show_basket import ShowBasketHandler
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.cli.context import pass_services, run


def _display_basket(entries: list[BasketEntryDTO]) -> None:
    click.echo(f"  {'Item ID':<18} {'Name':<16} {'Qty':>5} {'Owner':<10} {'Expires':<10}")
    click.echo(f"  {'-'*63}")
    for e in entries:
        click.echo(
            f"  {e.id:<18} {e.name:<16} {e.quantity:>5} {e.owner:<10} {e.expiry_date:<10}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Units':<36} {sum(e.quantity for e in entries):>5}")


@click.command("show")
@pass_services
def basket_show(services: Services) -> None:
    """Show items currently in the basket."""
    handler = ShowBasketHandler(coordinator=services.coordinator)
    entries = run(services, handler.handle)

    if not entries:
        click.echo("Basket is empty.")
        return
    _display_basket(entries)


@click.command("add")
@click.option("--product-id", required=True, help="Stock product ID to take one unit of.")
@pass_services
def basket_add(services: Services, product_id: str) -> None:
    """Move one unit of a product from stock into the basket."""
    handler = AddToBasketHandler(coordinator=services.coordinator)
    entry = run(services, lambda: handler.handle(product_id))
    click.echo(f"Added 1 x {entry.name} to basket ({entry.quantity} in basket).")


@click.command("return")
@click.option("--item-id", required=True, help="Basket item ID to return one unit of.")
@pass_services
def basket_return(services: Services, item_id: str) -> None:
    """Return one unit of a basket item to stock."""
    handler = ReturnToStockHandler(coordinator=services.coordinator)
    run(services, lambda: handler.handle(item_id))
    click.echo(f"Returned 1 unit of basket item {item_id} to stock.")


@click.command("checkout")
@click.option("--yes", is_flag=True, default=False, help="Confirm without prompting.")
@pass_services
def basket_checkout(services: Services, yes: bool) -> None:
    """Review the basket and confirm the purchase."""
    handler = ConfirmPurchaseHandler(coordinator=services.coordinator)
    entries = run(services, handler.preview)
    _display_basket(entries)

    if not yes and not click.confirm("Confirm purchase?", default=False):
        click.echo("Purchase not confirmed.")
        return

    purchased = run(services, handler.handle)
    click.echo(f"Purchase confirmed: {sum(e.quantity for e in purchased)} units bought.")
