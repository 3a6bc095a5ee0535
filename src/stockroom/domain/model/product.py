"""Product: a line in the Stock Ledger.

Products are deduplicated on ``(name, owner)``: recording the same item
for the same owner twice increments one record instead of creating two.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Product:
    """A quantity of one named item recorded by one owner.

    ``quantity`` is never persisted at zero; the ledger deletes the record
    as soon as an adjustment drives it to zero or below.
    """

    id: str
    type: str
    name: str
    quantity: int
    owner: str
    expiry_date: str
    date_added: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.owner)

    def metadata(self) -> dict[str, str]:
        """Snapshot of everything except identity and quantity."""
        return {
            "type": self.type,
            "name": self.name,
            "owner": self.owner,
            "expiry_date": self.expiry_date,
            "date_added": self.date_added,
        }
