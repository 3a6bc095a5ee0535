"""Shared plumbing for CLI commands: services lookup and async dispatch."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import click

from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import Services

T = TypeVar("T")

pass_services = click.make_pass_decorator(Services)


def run(services: Services, action: Callable[[], Awaitable[T]]) -> T:
    """Run one async use case, turning domain errors into CLI errors."""

    async def _main() -> T:
        await services.seed()
        return await action()

    try:
        return asyncio.run(_main())
    except DomainException as exc:
        raise click.ClickException(str(exc))
