"""Application service: Show Basket use case (query)."""

from __future__ import annotations

from stockroom.application.dto import BasketEntryDTO
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class ShowBasketHandler:

    def __init__(self, coordinator: TransferCoordinator) -> None:
        self._coordinator = coordinator

    async def handle(self) -> list[BasketEntryDTO]:
        entries = await self._coordinator.list_basket()
        return [BasketEntryDTO.from_domain(e) for e in entries]
