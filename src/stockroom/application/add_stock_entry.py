"""Application service: Add Stock Entry use case.

Stamps the logged-in user as owner and today's date as ``date_added``,
then hands off to the coordinator, which validates and merges on
(name, owner).
"""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.clock import Clock
from stockroom.domain.model.user import Session
from stockroom.domain.service.credential_gate import CredentialGate
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class AddStockEntryHandler:

    def __init__(
        self,
        coordinator: TransferCoordinator,
        gate: CredentialGate,
        clock: Clock,
    ) -> None:
        self._coordinator = coordinator
        self._gate = gate
        self._clock = clock

    async def handle(
        self,
        session: Session,
        type: str,
        name: str,
        quantity: int | str,
        expiry_date: str,
    ) -> ProductDTO:
        user = await self._gate.require_user(session)
        product = await self._coordinator.add_stock_entry(
            type=type,
            name=name,
            quantity=quantity,
            owner=user.username,
            expiry_date=expiry_date,
            date_added=self._clock.today_iso(),
        )
        return ProductDTO.from_domain(product)
