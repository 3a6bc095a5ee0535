"""Application service: Register User use case."""

from __future__ import annotations

from stockroom.application.dto import UserDTO
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.repository.user_repository import UserRepository
from stockroom.domain.service.credential_gate import PasswordHasher


class RegisterUserHandler:

    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    async def handle(self, username: str, password: str, is_admin: bool = False) -> UserDTO:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")

        if await self._users.get_by_username(username) is not None:
            raise ValidationError(f"User '{username}' already exists, please login")

        user = await self._users.create(username, self._hasher.hash(password), is_admin)
        return UserDTO.from_domain(user)
