"""In-memory implementation of DocumentStore.

Each call yields to the event loop once before touching the data, so
concurrent operations interleave between store calls the same way they
would against a real I/O-backed store.
"""

from __future__ import annotations

import asyncio

from stockroom.domain.repository.document_store import (
    DocumentStore,
    Record,
    matches,
    new_record_id,
)


class MemoryDocumentStore(DocumentStore):

    def __init__(self, records: list[Record] | None = None) -> None:
        self._records: dict[str, Record] = {}
        for raw in records or []:
            record = dict(raw)
            record.setdefault("_id", new_record_id())
            self._records[record["_id"]] = record

    # --- DocumentStore interface ----------------------------------------------

    async def find_one(self, query: Record) -> Record | None:
        await asyncio.sleep(0)
        for record in self._records.values():
            if matches(record, query):
                return dict(record)
        return None

    async def find(self, query: Record | None = None) -> list[Record]:
        await asyncio.sleep(0)
        return [dict(r) for r in self._records.values() if matches(r, query)]

    async def insert(self, record: Record) -> Record:
        await asyncio.sleep(0)
        stored = dict(record)
        stored.setdefault("_id", new_record_id())
        self._records[stored["_id"]] = stored
        return dict(stored)

    async def update(self, record_id: str, fields: Record) -> int:
        await asyncio.sleep(0)
        record = self._records.get(record_id)
        if record is None:
            return 0
        record.update(fields)
        return 1

    async def remove(self, record_id: str) -> int:
        await asyncio.sleep(0)
        return 1 if self._records.pop(record_id, None) is not None else 0

    async def remove_all(self) -> int:
        await asyncio.sleep(0)
        count = len(self._records)
        self._records.clear()
        return count
