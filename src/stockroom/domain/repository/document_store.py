"""Abstract document store backing every ledger.

A store is a flat collection of records keyed by an opaque ``_id``. There
is no foreign-key enforcement between stores; references such as
``source_product_id`` are advisory and must be checked by the caller.

Every method is a coroutine, and every call is a point at which other
operations may interleave. Nothing here provides isolation across calls.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


def new_record_id() -> str:
    return uuid.uuid4().hex[:16]


def matches(record: Record, query: Record | None) -> bool:
    """Field-equality match; an empty or missing query matches everything."""
    if not query:
        return True
    return all(record.get(field) == value for field, value in query.items())


class DocumentStore(ABC):

    @abstractmethod
    async def find_one(self, query: Record) -> Record | None:
        """Return a copy of the first matching record, or None."""

    @abstractmethod
    async def find(self, query: Record | None = None) -> list[Record]:
        """Return copies of all matching records in insertion order."""

    @abstractmethod
    async def insert(self, record: Record) -> Record:
        """Store a new record, assigning ``_id`` if absent; return a copy."""

    @abstractmethod
    async def update(self, record_id: str, fields: Record) -> int:
        """Set ``fields`` on the record; return the number updated (0 or 1)."""

    @abstractmethod
    async def remove(self, record_id: str) -> int:
        """Delete one record; return the number removed (0 or 1)."""

    @abstractmethod
    async def remove_all(self) -> int:
        """Delete every record; return the number removed."""
