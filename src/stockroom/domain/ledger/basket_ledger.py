"""Basket Ledger: units reserved by the session, keyed by source product id."""

from __future__ import annotations

from stockroom.domain.exceptions import ItemNotFound
from stockroom.domain.ledger.quantity_ledger import QuantityLedger, as_quantity
from stockroom.domain.model.basket import BasketEntry
from stockroom.domain.repository.document_store import Record


class BasketLedger(QuantityLedger[BasketEntry]):

    not_found_error = ItemNotFound

    def _key_query(self, key: str) -> Record:
        return {"source_product_id": key}

    def _new_record(self, key: str, metadata: dict[str, str], quantity: int) -> Record:
        return {
            "type": metadata.get("type", ""),
            "name": metadata["name"],
            "quantity": quantity,
            "source_product_id": key,
            "owner": metadata.get("owner", ""),
            "expiry_date": metadata.get("expiry_date", ""),
            "date_added": metadata.get("date_added", ""),
        }

    def _to_domain(self, raw: Record) -> BasketEntry:
        return BasketEntry(
            id=raw["_id"],
            type=raw.get("type", ""),
            name=raw["name"],
            quantity=as_quantity(raw.get("quantity")),
            source_product_id=raw["source_product_id"],
            owner=raw.get("owner", ""),
            expiry_date=raw.get("expiry_date", ""),
            date_added=raw.get("date_added", ""),
        )
