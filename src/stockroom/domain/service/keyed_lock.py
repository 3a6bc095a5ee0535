"""Per-key mutual exclusion for transfers.

Transfers touching the same product id can be serialized by holding a lock
keyed on that id. Writes that upsert a stock line by (name, owner) also hold
a lock keyed on ``stock_line_key(name, owner)``. Line locks are always taken
before product-id locks. ``NoLock`` keeps the unserialized behaviour:
concurrent read-modify-write on one record, last write wins.
"""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncIterator, Hashable, Protocol


def stock_line_key(name: str, owner: str) -> tuple[str, str, str]:
    return ("stock", name, owner)


class TransferLock(Protocol):
    """Minimal interface the coordinator needs from a lock provider."""

    #: True when ``hold`` actually excludes other holders of the same key.
    exclusive: bool

    def hold(self, key: Hashable) -> AbstractAsyncContextManager[None]: ...


class NoLock:

    exclusive = False

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        yield


class KeyedLock:
    """One ``asyncio.Lock`` per key, dropped once nobody holds or awaits it."""

    exclusive = True

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
