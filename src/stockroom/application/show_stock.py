"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class ShowStockHandler:

    def __init__(self, coordinator: TransferCoordinator) -> None:
        self._coordinator = coordinator

    async def handle(self, owner: str | None = None) -> list[ProductDTO]:
        if owner is None:
            products = await self._coordinator.list_stock()
        else:
            products = await self._coordinator.list_stock_by_owner(owner)
        return [ProductDTO.from_domain(p) for p in products]
