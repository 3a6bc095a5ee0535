"""Application service: Login use case."""

from __future__ import annotations

from stockroom.application.dto import UserDTO
from stockroom.domain.model.user import Session
from stockroom.domain.repository.session_repository import SessionRepository
from stockroom.domain.service.credential_gate import CredentialGate


class LoginHandler:

    def __init__(self, gate: CredentialGate, sessions: SessionRepository) -> None:
        self._gate = gate
        self._sessions = sessions

    async def handle(self, username: str, password: str) -> UserDTO:
        user = await self._gate.verify_credentials(username, password)
        self._sessions.save(Session(username=user.username))
        return UserDTO.from_domain(user)
