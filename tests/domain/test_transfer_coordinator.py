"""Unit tests for the TransferCoordinator domain service."""

import asyncio

import pytest

from stockroom.domain.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ItemNotFound,
    ProductNotFound,
)
from tests.fakes import basket_record, make_coordinator, product_record, units_by_name


class TestAddToBasket:

    def test_moves_one_unit(self):
        coord, stock, basket = make_coordinator([product_record("eggs", "Eggs", 2)])

        entry = asyncio.run(coord.add_to_basket("eggs"))

        assert entry.quantity == 1
        assert entry.source_product_id == "eggs"
        assert entry.name == "Eggs"
        assert entry.owner == "Peter"
        assert asyncio.run(stock.get("eggs")).quantity == 1

    def test_second_add_merges_basket_entry(self):
        coord, stock, basket = make_coordinator([product_record("eggs", "Eggs", 2)])

        asyncio.run(coord.add_to_basket("eggs"))
        entry = asyncio.run(coord.add_to_basket("eggs"))

        assert entry.quantity == 2
        assert len(asyncio.run(basket.list_all())) == 1
        assert asyncio.run(stock.get("eggs")) is None

    def test_unknown_product_rejected(self):
        coord, _, basket = make_coordinator()
        with pytest.raises(ProductNotFound):
            asyncio.run(coord.add_to_basket("ghost"))
        assert asyncio.run(basket.list_all()) == []

    def test_zero_quantity_record_rejected(self):
        coord, stock, basket = make_coordinator([product_record("stale", "Milk", 0)])
        with pytest.raises(InsufficientStock):
            asyncio.run(coord.add_to_basket("stale"))
        assert asyncio.run(basket.list_all()) == []

    def test_snapshot_taken_at_add_time(self):
        coord, _, _ = make_coordinator(
            [product_record("milk", "Milk", 3, expiry_date="2031-05-05", type="Drinks")]
        )
        entry = asyncio.run(coord.add_to_basket("milk"))
        assert entry.expiry_date == "2031-05-05"
        assert entry.type == "Drinks"


class TestReturnToStock:

    def test_credits_existing_product(self):
        coord, stock, basket = make_coordinator(
            [product_record("eggs", "Eggs", 1)],
            [basket_record("b1", "eggs", "Eggs", 2)],
        )

        asyncio.run(coord.return_to_stock("b1"))

        assert asyncio.run(stock.get("eggs")).quantity == 2
        assert asyncio.run(basket.get("b1")).quantity == 1

    def test_last_unit_removes_basket_entry(self):
        coord, stock, basket = make_coordinator(
            [product_record("eggs", "Eggs", 1)],
            [basket_record("b1", "eggs", "Eggs", 1)],
        )

        asyncio.run(coord.return_to_stock("b1"))

        assert asyncio.run(stock.get("eggs")).quantity == 2
        assert asyncio.run(basket.list_all()) == []

    def test_recreates_missing_source_product(self):
        coord, stock, basket = make_coordinator(
            [],
            [basket_record("b1", "gone", "Butter", 3, owner="Ann", expiry_date="2030-02-20")],
        )

        asyncio.run(coord.return_to_stock("b1"))

        products = asyncio.run(stock.list_all())
        assert len(products) == 1
        recreated = products[0]
        assert recreated.id != "gone"
        assert (recreated.name, recreated.owner, recreated.quantity) == ("Butter", "Ann", 1)
        assert recreated.expiry_date == "2030-02-20"
        assert asyncio.run(basket.get("b1")).quantity == 2

    def test_recreate_merges_with_same_name_and_owner(self):
        coord, stock, _ = make_coordinator(
            [product_record("readded", "Butter", 4, owner="Ann")],
            [basket_record("b1", "gone", "Butter", 1, owner="Ann")],
        )

        asyncio.run(coord.return_to_stock("b1"))

        products = asyncio.run(stock.list_all())
        assert [(p.id, p.quantity) for p in products] == [("readded", 5)]

    def test_unknown_item_rejected(self):
        coord, _, _ = make_coordinator()
        with pytest.raises(ItemNotFound):
            asyncio.run(coord.return_to_stock("ghost"))

    def test_zero_quantity_entry_rejected(self):
        coord, stock, _ = make_coordinator(
            [product_record("eggs", "Eggs", 1)],
            [basket_record("b1", "eggs", "Eggs", 0)],
        )
        with pytest.raises(InvalidQuantity):
            asyncio.run(coord.return_to_stock("b1"))
        assert asyncio.run(stock.get("eggs")).quantity == 1


class TestConservation:

    def test_stock_plus_basket_constant_across_transfers(self):
        coord, stock, basket = make_coordinator([product_record("eggs", "Eggs", 3)])

        async def scenario():
            totals = []
            for step in ("add", "add", "add", "return", "add", "return", "return", "return"):
                if step == "add":
                    products = [p for p in await stock.list_all() if p.name == "Eggs"]
                    await coord.add_to_basket(products[0].id)
                else:
                    entry = (await basket.list_all())[0]
                    await coord.return_to_stock(entry.id)
                in_stock, in_basket = await units_by_name(stock, basket, "Eggs")
                totals.append(in_stock + in_basket)
            return totals, await units_by_name(stock, basket, "Eggs")

        totals, final = asyncio.run(scenario())

        assert totals == [3] * 8
        assert final == (3, 0)


class TestConfirmPurchase:

    def test_clears_basket_without_returning_stock(self):
        coord, stock, basket = make_coordinator(
            [product_record("eggs", "Eggs", 1)],
            [basket_record("b1", "eggs", "Eggs", 2), basket_record("b2", "milk", "Milk", 1)],
        )

        assert asyncio.run(coord.confirm_purchase()) == 2

        assert asyncio.run(basket.list_all()) == []
        assert asyncio.run(stock.get("eggs")).quantity == 1


class TestLogoutDrain:

    def test_returns_full_quantities(self):
        coord, stock, basket = make_coordinator(
            [product_record("eggs", "Eggs", 1), product_record("milk", "Milk", 4)],
            [basket_record("b1", "eggs", "Eggs", 3), basket_record("b2", "milk", "Milk", 1)],
        )

        report = asyncio.run(coord.logout_drain())

        assert (report.items, report.units) == (2, 4)
        assert asyncio.run(stock.get("eggs")).quantity == 4
        assert asyncio.run(stock.get("milk")).quantity == 5
        assert asyncio.run(basket.list_all()) == []

    def test_recreates_missing_products_with_full_quantity(self):
        coord, stock, basket = make_coordinator(
            [],
            [basket_record("b1", "gone", "Butter", 3, owner="Ann")],
        )

        asyncio.run(coord.logout_drain())

        products = asyncio.run(stock.list_all())
        assert [(p.name, p.owner, p.quantity) for p in products] == [("Butter", "Ann", 3)]
        assert asyncio.run(basket.list_all()) == []

    def test_empty_basket_is_noop(self):
        coord, stock, _ = make_coordinator([product_record("eggs", "Eggs", 1)])

        report = asyncio.run(coord.logout_drain())

        assert (report.items, report.units) == (0, 0)
        assert asyncio.run(stock.get("eggs")).quantity == 1


class TestDeleteProduct:

    def test_deletes(self):
        coord, stock, _ = make_coordinator([product_record("eggs", "Eggs", 1)])
        assert asyncio.run(coord.delete_product("eggs")) == 1
        assert asyncio.run(stock.list_all()) == []

    def test_unknown_rejected(self):
        coord, _, _ = make_coordinator()
        with pytest.raises(ProductNotFound, match="already deleted"):
            asyncio.run(coord.delete_product("ghost"))

    def test_basket_return_after_delete_recreates(self):
        coord, stock, basket = make_coordinator([product_record("eggs", "Eggs", 2)])

        async def scenario():
            entry = await coord.add_to_basket("eggs")
            await coord.delete_product("eggs")
            await coord.return_to_stock(entry.id)
            return await stock.list_all(), await basket.list_all()

        products, entries = asyncio.run(scenario())

        assert [(p.name, p.quantity) for p in products] == [("Eggs", 1)]
        assert entries == []
