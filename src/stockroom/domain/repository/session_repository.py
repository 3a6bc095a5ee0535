"""Abstract repository for the caller's login session."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.user import Session


class SessionRepository(ABC):

    @abstractmethod
    def load(self) -> Session:
        """Return the current session (anonymous if none was saved)."""

    @abstractmethod
    def save(self, session: Session) -> None:
        """Persist the session."""

    def clear(self) -> None:
        self.save(Session())
