"""Sample data inserted into empty stores on first run."""

from __future__ import annotations

import logging

from stockroom.domain.ledger.stock_ledger import StockLedger
from stockroom.domain.repository.user_repository import UserRepository
from stockroom.domain.service.credential_gate import PasswordHasher

logger = logging.getLogger(__name__)

SAMPLE_STOCK = [
    ("Dairy", "Milk", 1, "Peter", "2030-02-20", "2024-02-15"),
    ("Dairy", "Eggs", 2, "Peter", "2030-02-20", "2024-02-15"),
    ("Dairy", "Butter", 2, "Ann", "2030-02-20", "2024-02-15"),
]

# (username, password, is_admin)
SAMPLE_USERS = [
    ("user", "user", False),
    ("admin", "admin", True),
]


async def seed_sample_data(
    stock: StockLedger,
    users: UserRepository,
    hasher: PasswordHasher,
) -> None:
    if not await stock.list_all():
        for type_, name, quantity, owner, expiry, added in SAMPLE_STOCK:
            await stock.add_entry(type_, name, quantity, owner, expiry, added)
        logger.info("Sample data inserted into the stock")

    if not await users.list_all():
        for username, password, is_admin in SAMPLE_USERS:
            await users.create(username, hasher.hash(password), is_admin)
        logger.info("Sample accounts created")
