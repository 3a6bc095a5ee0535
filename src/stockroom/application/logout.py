"""Application service: Logout use case.

Ends the session, then drains the basket back to stock. The session is
cleared even if the drain fails; a drain failure still propagates so the
caller can report it.
"""

from __future__ import annotations

from stockroom.domain.repository.session_repository import SessionRepository
from stockroom.domain.service.transfer_coordinator import (
    DrainReport,
    TransferCoordinator,
)


class LogoutHandler:

    def __init__(
        self,
        coordinator: TransferCoordinator,
        sessions: SessionRepository,
    ) -> None:
        self._coordinator = coordinator
        self._sessions = sessions

    async def handle(self) -> DrainReport:
        self._sessions.clear()
        return await self._coordinator.logout_drain()
