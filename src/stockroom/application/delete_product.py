"""Application service: Delete Product use case (admin only)."""

from __future__ import annotations

from stockroom.domain.model.user import Session
from stockroom.domain.service.credential_gate import CredentialGate
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class DeleteProductHandler:

    def __init__(self, coordinator: TransferCoordinator, gate: CredentialGate) -> None:
        self._coordinator = coordinator
        self._gate = gate

    async def handle(self, session: Session, product_id: str) -> None:
        await self._gate.require_admin(session)
        await self._coordinator.delete_product(product_id)
