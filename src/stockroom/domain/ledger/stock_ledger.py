"""Stock Ledger: products available for purchase, keyed by (name, owner)."""

from __future__ import annotations

from stockroom.domain.exceptions import ProductNotFound
from stockroom.domain.ledger.quantity_ledger import QuantityLedger, as_quantity
from stockroom.domain.model.product import Product
from stockroom.domain.repository.document_store import Record


class StockLedger(QuantityLedger[Product]):

    not_found_error = ProductNotFound

    async def add_entry(
        self,
        type: str,
        name: str,
        quantity: int,
        owner: str,
        expiry_date: str,
        date_added: str,
    ) -> Product:
        """Record ``quantity`` units, merging into an existing (name, owner) line."""
        metadata = {
            "type": type,
            "name": name,
            "owner": owner,
            "expiry_date": expiry_date,
            "date_added": date_added,
        }
        return await self.upsert_add((name, owner), metadata, quantity)

    # --- QuantityLedger hooks -------------------------------------------------

    def _key_query(self, key: tuple[str, str]) -> Record:
        name, owner = key
        return {"name": name, "owner": owner}

    def _new_record(self, key: tuple[str, str], metadata: dict[str, str], quantity: int) -> Record:
        name, owner = key
        return {
            "type": metadata.get("type", ""),
            "name": name,
            "quantity": quantity,
            "owner": owner,
            "expiry_date": metadata.get("expiry_date", ""),
            "date_added": metadata.get("date_added", ""),
        }

    def _to_domain(self, raw: Record) -> Product:
        return Product(
            id=raw["_id"],
            type=raw.get("type", ""),
            name=raw["name"],
            quantity=as_quantity(raw.get("quantity")),
            owner=raw.get("owner", ""),
            expiry_date=raw.get("expiry_date", ""),
            date_added=raw.get("date_added", ""),
        )
