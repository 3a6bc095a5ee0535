"""Application services: admin user management.

Every handler here requires the session to belong to an administrator.
"""

from __future__ import annotations

from stockroom.application.dto import UserDTO
from stockroom.domain.exceptions import NotFound, ValidationError
from stockroom.domain.model.user import Session
from stockroom.domain.repository.user_repository import UserRepository
from stockroom.domain.service.credential_gate import CredentialGate


class ListUsersHandler:

    def __init__(self, users: UserRepository, gate: CredentialGate) -> None:
        self._users = users
        self._gate = gate

    async def handle(self, session: Session) -> list[UserDTO]:
        await self._gate.require_admin(session)
        return [UserDTO.from_domain(u) for u in await self._users.list_all()]


class UpdateUserHandler:

    def __init__(self, users: UserRepository, gate: CredentialGate) -> None:
        self._users = users
        self._gate = gate

    async def handle(self, session: Session, user_id: str, is_admin: bool) -> UserDTO:
        await self._gate.require_admin(session)
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User '{user_id}' not found")

        await self._users.update(user_id, {"is_admin": is_admin})
        user.is_admin = is_admin
        return UserDTO.from_domain(user)


class DeleteUserHandler:

    def __init__(self, users: UserRepository, gate: CredentialGate) -> None:
        self._users = users
        self._gate = gate

    async def handle(self, session: Session, user_id: str) -> None:
        admin = await self._gate.require_admin(session)
        if admin.id == user_id:
            raise ValidationError("Administrators cannot delete their own account")
        if await self._users.delete(user_id) == 0:
            raise NotFound(f"User '{user_id}' not found")
