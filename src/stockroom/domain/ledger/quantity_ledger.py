"""Quantity Ledger: keyed records holding non-negative integer quantities.

This is the one place that knows a record whose quantity falls to zero or
below must be deleted rather than stored. Stock and basket ledgers differ
only in how they key and (de)serialize their records.

``adjust_quantity`` is a read followed by a write with a suspend point in
between. Two concurrent adjustments of the same record can both read the
same starting quantity, and the later write wins.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from stockroom.domain.exceptions import InvalidQuantity, NotFound
from stockroom.domain.repository.document_store import DocumentStore, Record

logger = logging.getLogger(__name__)

E = TypeVar("E")


class QuantityLedger(ABC, Generic[E]):

    #: Raised by ``adjust_quantity`` when the id does not resolve.
    not_found_error: type[NotFound] = NotFound

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- Subclass hooks -------------------------------------------------------

    @abstractmethod
    def _key_query(self, key: Any) -> Record:
        """Store query selecting the record for a ledger key."""

    @abstractmethod
    def _new_record(self, key: Any, metadata: dict[str, str], quantity: int) -> Record:
        """Raw record for a key seen for the first time."""

    @abstractmethod
    def _to_domain(self, raw: Record) -> E:
        ...

    # --- Queries --------------------------------------------------------------

    async def find_by_key(self, key: Any) -> E | None:
        raw = await self._store.find_one(self._key_query(key))
        return self._to_domain(raw) if raw is not None else None

    async def get(self, entry_id: str) -> E | None:
        raw = await self._store.find_one({"_id": entry_id})
        return self._to_domain(raw) if raw is not None else None

    async def list_all(self) -> list[E]:
        return [self._to_domain(raw) for raw in await self._store.find()]

    async def list_by_owner(self, owner: str) -> list[E]:
        return [self._to_domain(raw) for raw in await self._store.find({"owner": owner})]

    # --- Mutations ------------------------------------------------------------

    async def upsert_add(self, key: Any, metadata: dict[str, str], delta: int) -> E:
        """Add ``delta`` units under ``key``, creating the record if needed."""
        if delta <= 0:
            raise InvalidQuantity(f"Cannot add {delta} units; quantity must be positive")

        raw = await self._store.find_one(self._key_query(key))
        if raw is not None:
            new_quantity = as_quantity(raw.get("quantity")) + delta
            await self._store.update(raw["_id"], {"quantity": new_quantity})
            raw["quantity"] = new_quantity
            logger.debug("%s %s: +%d -> %d", self._name, raw["_id"], delta, new_quantity)
            return self._to_domain(raw)

        created = await self._store.insert(self._new_record(key, metadata, delta))
        logger.debug("%s %s: created with %d", self._name, created["_id"], delta)
        return self._to_domain(created)

    async def adjust_quantity(self, entry_id: str, delta: int) -> int:
        """Apply ``delta`` to a record, deleting it at zero or below.

        Returns the number of records deleted or updated.
        """
        raw = await self._store.find_one({"_id": entry_id})
        if raw is None:
            raise self.not_found_error(f"{self._name} entry '{entry_id}' not found")

        new_quantity = as_quantity(raw.get("quantity")) + delta
        if new_quantity <= 0:
            removed = await self._store.remove(entry_id)
            logger.debug("%s %s: removed at quantity %d", self._name, entry_id, new_quantity)
            return removed

        updated = await self._store.update(entry_id, {"quantity": new_quantity})
        logger.debug("%s %s: %+d -> %d", self._name, entry_id, delta, new_quantity)
        return updated

    async def remove(self, entry_id: str) -> int:
        return await self._store.remove(entry_id)

    async def remove_all(self) -> int:
        removed = await self._store.remove_all()
        logger.debug("%s: cleared %d entries", self._name, removed)
        return removed

    async def correct_quantities(self) -> int:
        """Rewrite every stored quantity as an int; non-numeric becomes 0.

        Returns the number of records whose stored value changed.
        """
        corrected = 0
        for raw in await self._store.find():
            if type(raw.get("quantity")) is not int:
                await self._store.update(raw["_id"], {"quantity": as_quantity(raw.get("quantity"))})
                corrected += 1
        if corrected:
            logger.info("%s: corrected %d quantities", self._name, corrected)
        return corrected

    @property
    def _name(self) -> str:
        return type(self).__name__


def as_quantity(value: object) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0
