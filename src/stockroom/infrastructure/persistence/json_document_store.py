"""JSON-file-backed implementation of DocumentStore."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from stockroom.domain.exceptions import StorageError
from stockroom.domain.repository.document_store import (
    DocumentStore,
    Record,
    matches,
    new_record_id,
)

logger = logging.getLogger(__name__)


class JsonDocumentStore(DocumentStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- DocumentStore interface ----------------------------------------------

    async def find_one(self, query: Record) -> Record | None:
        for raw in await self._load_raw():
            if matches(raw, query):
                return raw
        return None

    async def find(self, query: Record | None = None) -> list[Record]:
        return [raw for raw in await self._load_raw() if matches(raw, query)]

    async def insert(self, record: Record) -> Record:
        records = await self._load_raw()
        stored = dict(record)
        stored.setdefault("_id", new_record_id())
        records.append(stored)
        self._persist_raw(records)
        return dict(stored)

    async def update(self, record_id: str, fields: Record) -> int:
        records = await self._load_raw()
        for raw in records:
            if raw.get("_id") == record_id:
                raw.update(fields)
                self._persist_raw(records)
                return 1
        return 0

    async def remove(self, record_id: str) -> int:
        records = await self._load_raw()
        kept = [raw for raw in records if raw.get("_id") != record_id]
        removed = len(records) - len(kept)
        if removed:
            self._persist_raw(kept)
        return removed

    async def remove_all(self) -> int:
        records = await self._load_raw()
        self._persist_raw([])
        return len(records)

    # --- File helpers ---------------------------------------------------------

    async def _load_raw(self) -> list[Record]:
        await asyncio.sleep(0)
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot read {self._file_path.name}") from exc

    def _persist_raw(self, records: list[Record]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            logger.error("Failed to write %s: %s", self._file_path, exc)
            raise StorageError(f"Cannot write {self._file_path.name}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
            logger.info("Created document store at %s", self._file_path)
