"""Credential gate: resolves who the caller is.

The transfer core only asks the gate for the current user's name to stamp
``owner`` on new stock. How passwords are hashed is the hasher's business.
"""

from __future__ import annotations

import logging
from typing import Protocol

from stockroom.domain.exceptions import AuthFailed
from stockroom.domain.model.user import Session, User
from stockroom.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class PasswordHasher(Protocol):

    def hash(self, password: str) -> str: ...

    def verify(self, password_hash: str, password: str) -> bool: ...


class CredentialGate:

    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    async def verify_credentials(self, username: str, password: str) -> User:
        user = await self._users.get_by_username(username)
        if user is None or not self._hasher.verify(user.password_hash, password):
            logger.warning("Failed login for %r", username)
            raise AuthFailed("Invalid username or password")
        return user

    async def current_user(self, session: Session) -> User | None:
        """Return the logged-in user, or None for an anonymous session."""
        if not session.username:
            return None
        return await self._users.get_by_username(session.username)

    async def require_user(self, session: Session) -> User:
        user = await self.current_user(session)
        if user is None:
            raise AuthFailed("You must be logged in")
        return user

    async def require_admin(self, session: Session) -> User:
        user = await self.require_user(session)
        if not user.is_admin:
            raise AuthFailed(f"User '{user.username}' is not an administrator")
        return user
