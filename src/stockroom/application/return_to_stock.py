"""Application service: Return To Stock use case."""

from __future__ import annotations

from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class ReturnToStockHandler:

    def __init__(self, coordinator: TransferCoordinator) -> None:
        self._coordinator = coordinator

    async def handle(self, basket_item_id: str) -> None:
        await self._coordinator.return_to_stock(basket_item_id)
