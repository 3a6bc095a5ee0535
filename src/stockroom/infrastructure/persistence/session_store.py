"""Session repositories: JSON file for the CLI, memory for tests."""

from __future__ import annotations

import json
from pathlib import Path

from stockroom.domain.exceptions import StorageError
from stockroom.domain.model.user import Session
from stockroom.domain.repository.session_repository import SessionRepository


class JsonSessionRepository(SessionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> Session:
        if not self._file_path.exists():
            return Session()
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self._file_path.name}") from exc
        return Session(username=raw.get("username"))

    def save(self, session: Session) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"username": session.username}) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path.name}") from exc


class MemorySessionRepository(SessionRepository):

    def __init__(self, session: Session | None = None) -> None:
        self._session = session or Session()

    def load(self) -> Session:
        return Session(username=self._session.username)

    def save(self, session: Session) -> None:
        self._session = Session(username=session.username)
