"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.config import Settings
from stockroom.domain.clock import Clock, SystemClock
from stockroom.domain.ledger.basket_ledger import BasketLedger
from stockroom.domain.ledger.stock_ledger import StockLedger
from stockroom.domain.repository.document_store import DocumentStore
from stockroom.domain.repository.session_repository import SessionRepository
from stockroom.domain.repository.user_repository import UserRepository
from stockroom.domain.service.credential_gate import CredentialGate, PasswordHasher
from stockroom.domain.service.keyed_lock import KeyedLock, NoLock
from stockroom.domain.service.transfer_coordinator import TransferCoordinator
from stockroom.infrastructure.persistence.json_document_store import JsonDocumentStore
from stockroom.infrastructure.persistence.memory_document_store import (
    MemoryDocumentStore,
)
from stockroom.infrastructure.persistence.session_store import (
    JsonSessionRepository,
    MemorySessionRepository,
)
from stockroom.infrastructure.security import WerkzeugPasswordHasher
from stockroom.infrastructure.seed import seed_sample_data


@dataclass
class Services:
    settings: Settings
    clock: Clock
    stock: StockLedger
    basket: BasketLedger
    users: UserRepository
    sessions: SessionRepository
    hasher: PasswordHasher
    gate: CredentialGate
    coordinator: TransferCoordinator
    # True when the stores did not exist before this process created them
    fresh: bool

    async def seed(self) -> None:
        if self.fresh and self.settings.seed:
            await seed_sample_data(self.stock, self.users, self.hasher)
            self.fresh = False


def _store(settings: Settings, name: str) -> DocumentStore:
    if settings.in_memory:
        return MemoryDocumentStore()
    return JsonDocumentStore(settings.data_dir / f"{name}.json")


def build_services(settings: Settings, clock: Clock | None = None) -> Services:
    clock = clock or SystemClock()
    fresh = settings.in_memory or not (settings.data_dir / "stock.json").exists()

    stock = StockLedger(_store(settings, "stock"))
    basket = BasketLedger(_store(settings, "basket"))
    users = UserRepository(_store(settings, "users"))
    if settings.in_memory:
        sessions: SessionRepository = MemorySessionRepository()
    else:
        sessions = JsonSessionRepository(settings.data_dir / "session.json")

    hasher = WerkzeugPasswordHasher()
    locks = KeyedLock() if settings.serialize_transfers else NoLock()
    coordinator = TransferCoordinator(stock, basket, locks=locks, clock=clock)

    return Services(
        settings=settings,
        clock=clock,
        stock=stock,
        basket=basket,
        users=users,
        sessions=sessions,
        hasher=hasher,
        gate=CredentialGate(users, hasher),
        coordinator=coordinator,
        fresh=fresh,
    )
