from __future__ import annotations

from pathlib import Path

import click

from stockroom.config import Settings
from stockroom.infrastructure.bootstrap import build_services
from stockroom.infrastructure.cli.basket_commands import (
    basket_add,
    basket_checkout,
    basket_return,
    basket_show,
)
from stockroom.infrastructure.cli.stock_commands import (
    stock_add,
    stock_delete,
    stock_fix_quantities,
    stock_list,
)
from stockroom.infrastructure.cli.user_commands import (
    user_delete,
    user_list,
    user_login,
    user_logout,
    user_register,
    user_update,
    user_whoami,
)
from stockroom.logging_config import configure_logging


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding the JSON stores.")
@click.option("--serialize/--no-serialize", default=None,
              help="Serialize transfers per product instead of last-write-wins.")
@click.option("--log-level", default=None, help="Logging level, e.g. INFO or DEBUG.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, serialize: bool | None, log_level: str | None) -> None:
    """Stockroom: stock, basket and checkout."""
    if ctx.obj is not None:
        return
    settings = Settings.from_env().with_overrides(
        data_dir=data_dir,
        serialize_transfers=serialize,
        log_level=log_level.upper() if log_level else None,
    )
    configure_logging(settings.log_level)
    ctx.obj = build_services(settings)


@cli.group()
def stock() -> None:
    """Manage stock."""


@cli.group()
def basket() -> None:
    """Manage the basket and checkout."""


@cli.group()
def user() -> None:
    """Manage accounts and sessions."""


# Register subcommands
stock.add_command(stock_add)
stock.add_command(stock_delete)
stock.add_command(stock_fix_quantities)
stock.add_command(stock_list)
basket.add_command(basket_add)
basket.add_command(basket_checkout)
basket.add_command(basket_return)
basket.add_command(basket_show)
user.add_command(user_delete)
user.add_command(user_list)
user.add_command(user_login)
user.add_command(user_logout)
user.add_command(user_register)
user.add_command(user_update)
user.add_command(user_whoami)
