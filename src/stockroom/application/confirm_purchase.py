"""Application service: Confirm Purchase use case.

The basket is shown for review first; confirming an empty basket is
rejected. Confirmation clears the basket without returning anything to
stock: the units have been sold.
"""

from __future__ import annotations

from stockroom.application.dto import BasketEntryDTO
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.service.transfer_coordinator import TransferCoordinator


class ConfirmPurchaseHandler:

    def __init__(self, coordinator: TransferCoordinator) -> None:
        self._coordinator = coordinator

    async def preview(self) -> list[BasketEntryDTO]:
        """Return the basket contents awaiting confirmation."""
        entries = await self._coordinator.list_basket()
        if not entries:
            raise ValidationError("No items in the basket for confirmation")
        return [BasketEntryDTO.from_domain(e) for e in entries]

    async def handle(self) -> list[BasketEntryDTO]:
        """Confirm the purchase and return what was bought."""
        purchased = await self.preview()
        await self._coordinator.confirm_purchase()
        return purchased
