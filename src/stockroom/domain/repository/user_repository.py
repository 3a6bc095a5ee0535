"""User accounts stored in a DocumentStore.

Unlike the ledgers, users carry no quantity; this is a plain keyed
collection with username uniqueness checked by the caller.
"""

from __future__ import annotations

from stockroom.domain.model.user import User
from stockroom.domain.repository.document_store import DocumentStore, Record


class UserRepository:

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_by_id(self, user_id: str) -> User | None:
        raw = await self._store.find_one({"_id": user_id})
        return self._to_domain(raw) if raw is not None else None

    async def get_by_username(self, username: str) -> User | None:
        raw = await self._store.find_one({"username": username})
        return self._to_domain(raw) if raw is not None else None

    async def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in await self._store.find()]

    async def create(self, username: str, password_hash: str, is_admin: bool = False) -> User:
        raw = await self._store.insert(
            {"username": username, "password_hash": password_hash, "is_admin": is_admin}
        )
        return self._to_domain(raw)

    async def update(self, user_id: str, fields: Record) -> int:
        return await self._store.update(user_id, fields)

    async def delete(self, user_id: str) -> int:
        return await self._store.remove(user_id)

    @staticmethod
    def _to_domain(raw: Record) -> User:
        return User(
            id=raw["_id"],
            username=raw["username"],
            password_hash=raw.get("password_hash", ""),
            is_admin=bool(raw.get("is_admin", False)),
        )
