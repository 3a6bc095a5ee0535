"""Domain service: moves units between the Stock and Basket ledgers.

Every transfer is an ordered sequence of ledger calls with no transaction
around it. A failure part-way through leaves the earlier steps applied;
nothing here compensates or retries.

The step order inside each transfer is fixed:

* add-to-basket debits stock *before* crediting the basket, so a failed
  basket write loses the unit.
* return-to-stock credits stock *before* debiting the basket, so a failed
  basket write leaves the unit counted twice rather than not at all.

Add and return always move one unit. The logout drain moves each basket
entry's whole remaining quantity in one step.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from dataclasses import dataclass
from datetime import date
from typing import AsyncIterator

from stockroom.domain.clock import Clock, SystemClock
from stockroom.domain.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ItemNotFound,
    ProductNotFound,
    ValidationError,
)
from stockroom.domain.ledger.basket_ledger import BasketLedger
from stockroom.domain.ledger.stock_ledger import StockLedger
from stockroom.domain.model.basket import BasketEntry
from stockroom.domain.model.product import Product
from stockroom.domain.service.keyed_lock import NoLock, TransferLock, stock_line_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrainReport:
    """Outcome of a logout drain."""

    items: int
    units: int


class TransferCoordinator:

    def __init__(
        self,
        stock: StockLedger,
        basket: BasketLedger,
        locks: TransferLock | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._stock = stock
        self._basket = basket
        self._locks = locks or NoLock()
        self._clock = clock or SystemClock()

    # --- Queries --------------------------------------------------------------

    async def list_stock(self) -> list[Product]:
        return await self._stock.list_all()

    async def list_stock_by_owner(self, owner: str) -> list[Product]:
        return await self._stock.list_by_owner(owner)

    async def list_basket(self) -> list[BasketEntry]:
        return await self._basket.list_all()

    # --- Stock maintenance ----------------------------------------------------

    async def add_stock_entry(
        self,
        type: str,
        name: str,
        quantity: int | str,
        owner: str,
        expiry_date: str,
        date_added: str,
    ) -> Product:
        """Validate and record new stock, merging on (name, owner).

        Raises ValidationError without touching the ledger if ``name`` is
        blank, ``expiry_date`` is missing or before today, or ``quantity``
        is not a positive integer.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Entries must have a product name")
        if not owner:
            raise ValidationError("Entries must have an owner")
        _check_iso_date(expiry_date, "expiry date")
        if expiry_date < self._clock.today_iso():
            raise ValidationError(
                f"Expiry date {expiry_date} is earlier than today ({self._clock.today_iso()})"
            )
        units = _parse_quantity(quantity)

        async with self._locks.hold(stock_line_key(name, owner)):
            existing = await self._stock.find_by_key((name, owner))
            async with self._locks.hold(existing.id) if existing else nullcontext():
                product = await self._stock.add_entry(
                    type=type or "",
                    name=name,
                    quantity=units,
                    owner=owner,
                    expiry_date=expiry_date,
                    date_added=date_added,
                )
        logger.info("Stocked %d x %s for %s (now %d)", units, name, owner, product.quantity)
        return product

    async def delete_product(self, product_id: str) -> int:
        async with self._locks.hold(product_id):
            product = await self._stock.get(product_id)
            if product is None:
                raise ProductNotFound(f"Product '{product_id}' not found or already deleted")
            removed = await self._stock.remove(product_id)
        logger.info("Deleted product %s (%s)", product_id, product.name)
        return removed

    # --- Transfers ------------------------------------------------------------

    async def add_to_basket(self, product_id: str) -> BasketEntry:
        """Move one unit of a product from stock into the basket.

        Under an exclusive lock the product is read again once the lock is
        held; if an earlier holder took the last unit, the caller gets
        InsufficientStock rather than ProductNotFound.
        """
        product = await self._stock.get(product_id)
        if product is None:
            raise ProductNotFound(f"Product '{product_id}' not found")

        async with self._locks.hold(product_id):
            if self._locks.exclusive:
                product = await self._stock.get(product_id)
            if product is None or product.quantity <= 0:
                raise InsufficientStock(f"Insufficient stock available for '{product_id}'")

            await self._stock.adjust_quantity(product_id, -1)
            entry = await self._basket.upsert_add(product_id, product.metadata(), 1)

        logger.info("Added 1 x %s to basket (basket now %d)", product.name, entry.quantity)
        return entry

    async def return_to_stock(self, basket_item_id: str) -> None:
        """Move one unit of a basket entry back to stock."""
        entry = await self._basket.get(basket_item_id)
        if entry is None:
            raise ItemNotFound(f"Item '{basket_item_id}' not found in basket")

        async with self._hold_line(entry):
            entry = await self._basket.get(basket_item_id)
            if entry is None:
                raise ItemNotFound(f"Item '{basket_item_id}' not found in basket")
            if entry.quantity <= 0:
                raise InvalidQuantity(f"Invalid item quantity in basket: {entry.quantity}")

            await self._credit_stock(entry, 1)
            if entry.quantity > 1:
                await self._basket.adjust_quantity(entry.id, -1)
            else:
                await self._basket.remove(entry.id)

        logger.info("Returned 1 x %s to stock", entry.name)

    async def confirm_purchase(self) -> int:
        """Complete the sale: clear the basket without returning anything."""
        removed = await self._basket.remove_all()
        logger.info("Purchase confirmed, %d basket entries cleared", removed)
        return removed

    async def logout_drain(self) -> DrainReport:
        """Return every basket entry's full quantity to stock, concurrently.

        Each entry is drained independently. If any drain fails, the others
        still run to completion and stay applied; the first failure is then
        re-raised.
        """
        entries = await self._basket.list_all()
        if not entries:
            return DrainReport(items=0, units=0)

        results = await asyncio.gather(
            *(self._drain_entry(entry) for entry in entries),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, Exception)]
        if failures:
            logger.error(
                "Logout drain failed for %d of %d basket entries",
                len(failures), len(entries),
            )
            raise failures[0]

        report = DrainReport(items=len(entries), units=sum(results))
        logger.info("Drained %d basket entries (%d units) back to stock", report.items, report.units)
        return report

    # --- Internal helpers -----------------------------------------------------

    @asynccontextmanager
    async def _hold_line(self, entry: BasketEntry) -> AsyncIterator[None]:
        """Hold the stock line lock, then the source product lock, for an entry."""
        async with self._locks.hold(stock_line_key(entry.name, entry.owner)):
            async with self._locks.hold(entry.source_product_id):
                yield

    async def _drain_entry(self, entry: BasketEntry) -> int:
        async with self._hold_line(entry):
            current = await self._basket.get(entry.id)
            if current is None:
                return 0
            await self._credit_stock(current, current.quantity)
            await self._basket.remove(current.id)
        return current.quantity

    async def _credit_stock(self, entry: BasketEntry, units: int) -> None:
        """Credit ``units`` to the entry's source product, recreating it if gone.

        Callers hold the entry's locks through ``_hold_line``.
        """
        source = await self._stock.get(entry.source_product_id)
        if source is not None:
            await self._stock.adjust_quantity(source.id, units)
            return

        logger.warning(
            "Source product %s of basket item %s is gone; recreating from snapshot",
            entry.source_product_id, entry.id,
        )
        await self._stock.upsert_add((entry.name, entry.owner), entry.metadata(), units)


def _check_iso_date(value: str, label: str) -> None:
    if not value:
        raise ValidationError(f"Entries must have a valid {label}")
    try:
        if len(value) != 10:
            raise ValueError(value)
        date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {label} {value!r}; expected YYYY-MM-DD") from exc


def _parse_quantity(raw: int | float | str) -> int:
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValidationError(f"Invalid quantity: {raw!r}")
    try:
        units = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid quantity: {raw!r}") from exc
    if units <= 0:
        raise ValidationError("Quantity must be positive")
    return units
