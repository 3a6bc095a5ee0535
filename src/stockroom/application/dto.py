"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.model.basket import BasketEntry
from stockroom.domain.model.product import Product
from stockroom.domain.model.user import User


@dataclass(frozen=True)
class ProductDTO:
    id: str
    type: str
    name: str
    quantity: int
    owner: str
    expiry_date: str
    date_added: str

    @classmethod
    def from_domain(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            type=product.type,
            name=product.name,
            quantity=product.quantity,
            owner=product.owner,
            expiry_date=product.expiry_date,
            date_added=product.date_added,
        )


@dataclass(frozen=True)
class BasketEntryDTO:
    id: str
    type: str
    name: str
    quantity: int
    source_product_id: str
    owner: str
    expiry_date: str

    @classmethod
    def from_domain(cls, entry: BasketEntry) -> BasketEntryDTO:
        return cls(
            id=entry.id,
            type=entry.type,
            name=entry.name,
            quantity=entry.quantity,
            source_product_id=entry.source_product_id,
            owner=entry.owner,
            expiry_date=entry.expiry_date,
        )


@dataclass(frozen=True)
class UserDTO:
    """Output: a user account without its password hash."""

    id: str
    username: str
    is_admin: bool

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(id=user.id, username=user.username, is_admin=user.is_admin)
