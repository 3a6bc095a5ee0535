"""Application service: Add To Basket use case."""

from __future__ import annotations

from stockroom.application.dto import BasketEntryDTO
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class AddToBasketHandler:

    def __init__(self, coordinator: TransferCoordinator) -> None:
        self._coordinator = coordinator

    async def handle(self, product_id: str) -> BasketEntryDTO:
        entry = await self._coordinator.add_to_basket(product_id)
        return BasketEntryDTO.from_domain(entry)
