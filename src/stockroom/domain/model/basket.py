"""BasketEntry: units of a product reserved by the current session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BasketEntry:
    """Reserved units drawn from one stock product.

    ``source_product_id`` is a lookup reference only. The stock product may
    be deleted while units sit in the basket, so the entry carries its own
    copy of the product metadata to recreate the stock record on return.
    """

    id: str
    type: str
    name: str
    quantity: int
    source_product_id: str
    owner: str
    expiry_date: str
    date_added: str

    def metadata(self) -> dict[str, str]:
        return {
            "type": self.type,
            "name": self.name,
            "owner": self.owner,
            "expiry_date": self.expiry_date,
            "date_added": self.date_added,
        }
