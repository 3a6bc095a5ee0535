"""Interleaving and partial-failure behaviour of transfers.

The unserialized tests pin down known weaknesses rather than desired
guarantees: they fail loudly if the behaviour silently changes.
"""

import asyncio

import pytest

from stockroom.domain.exceptions import InsufficientStock, ProductNotFound, StorageError
from stockroom.domain.model.basket import BasketEntry
from stockroom.domain.service.keyed_lock import KeyedLock
from tests.fakes import (
    TODAY,
    FailingDocumentStore,
    basket_record,
    make_coordinator,
    product_record,
    units_by_name,
)


async def _add_twice(coord, product_id):
    return await asyncio.gather(
        coord.add_to_basket(product_id),
        coord.add_to_basket(product_id),
        return_exceptions=True,
    )


class TestConcurrentAddToBasket:

    def test_unserialized_race_double_allocates_last_unit(self):
        coord, stock, basket = make_coordinator([product_record("milk", "Milk", 1)])

        async def scenario():
            results = await _add_twice(coord, "milk")
            return results, await units_by_name(stock, basket, "Milk")

        results, (in_stock, in_basket) = asyncio.run(scenario())

        # Both callers read quantity 1 before either wrote: lost update.
        assert all(isinstance(r, BasketEntry) for r in results)
        assert in_stock == 0
        assert in_basket == 2

    def test_serialized_allows_exactly_one(self):
        locks = KeyedLock()
        coord, stock, basket = make_coordinator(
            [product_record("milk", "Milk", 1)], locks=locks
        )

        async def scenario():
            results = await _add_twice(coord, "milk")
            return results, await units_by_name(stock, basket, "Milk")

        results, (in_stock, in_basket) = asyncio.run(scenario())

        successes = [r for r in results if isinstance(r, BasketEntry)]
        failures = [r for r in results if isinstance(r, InsufficientStock)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert (in_stock, in_basket) == (0, 1)
        assert len(locks) == 0

    def test_serialized_conserves_under_contention(self):
        coord, stock, basket = make_coordinator(
            [product_record("eggs", "Eggs", 5)], locks=KeyedLock()
        )

        async def scenario():
            results = await asyncio.gather(
                *(coord.add_to_basket("eggs") for _ in range(8)),
                return_exceptions=True,
            )
            return results, await units_by_name(stock, basket, "Eggs")

        results, (in_stock, in_basket) = asyncio.run(scenario())

        assert sum(isinstance(r, BasketEntry) for r in results) == 5
        assert sum(isinstance(r, InsufficientStock) for r in results) == 3
        assert (in_stock, in_basket) == (0, 5)

    def test_unserialized_delete_after_read_is_product_not_found(self):
        coord, stock, basket = make_coordinator([product_record("milk", "Milk", 2)])

        async def scenario():
            return await asyncio.gather(
                coord.delete_product("milk"),
                coord.add_to_basket("milk"),
                return_exceptions=True,
            )

        deleted, added = asyncio.run(scenario())

        assert deleted == 1
        assert isinstance(added, ProductNotFound)
        assert asyncio.run(units_by_name(stock, basket, "Milk")) == (0, 0)


class TestSerializedStockUpserts:

    def test_restock_waits_for_transfer_on_same_product(self):
        locks = KeyedLock()
        coord, stock, basket = make_coordinator(
            [product_record("milk", "Milk", 2)], locks=locks
        )

        async def scenario():
            await asyncio.gather(
                coord.add_to_basket("milk"),
                coord.add_stock_entry("Dairy", "Milk", 3, "Peter", "2030-01-01", TODAY),
            )
            return await units_by_name(stock, basket, "Milk")

        assert asyncio.run(scenario()) == (4, 1)
        assert len(locks) == 0

    def test_drain_recreates_one_product_per_name_and_owner(self):
        locks = KeyedLock()
        coord, stock, basket = make_coordinator(
            basket_records=[
                basket_record("b1", "gone1", "Milk", 1),
                basket_record("b2", "gone2", "Milk", 1),
            ],
            locks=locks,
        )

        report = asyncio.run(coord.logout_drain())

        products = asyncio.run(stock.list_all())
        assert report.units == 2
        assert [(p.name, p.owner, p.quantity) for p in products] == [("Milk", "Peter", 2)]
        assert asyncio.run(basket.list_all()) == []
        assert len(locks) == 0

    def test_restock_and_recreate_merge_into_one_line(self):
        coord, stock, basket = make_coordinator(
            basket_records=[basket_record("b1", "gone", "Milk", 2)],
            locks=KeyedLock(),
        )

        async def scenario():
            await asyncio.gather(
                coord.logout_drain(),
                coord.add_stock_entry("Dairy", "Milk", 3, "Peter", "2030-01-01", TODAY),
            )
            return await stock.list_all()

        products = asyncio.run(scenario())

        assert len(products) == 1
        assert products[0].quantity == 5


class TestKeyedLock:

    def test_same_key_runs_one_at_a_time(self):
        locks = KeyedLock()
        order = []

        async def worker(name):
            async with locks.hold("milk"):
                order.append(f"{name}-in")
                await asyncio.sleep(0)
                order.append(f"{name}-out")

        async def scenario():
            await asyncio.gather(worker("a"), worker("b"))

        asyncio.run(scenario())

        assert order == ["a-in", "a-out", "b-in", "b-out"]
        assert len(locks) == 0

    def test_different_keys_interleave(self):
        locks = KeyedLock()
        order = []

        async def worker(key):
            async with locks.hold(key):
                order.append(f"{key}-in")
                await asyncio.sleep(0)
                order.append(f"{key}-out")

        async def scenario():
            await asyncio.gather(worker("milk"), worker("eggs"))

        asyncio.run(scenario())

        assert order == ["milk-in", "eggs-in", "milk-out", "eggs-out"]


class TestPartialFailures:

    def test_add_to_basket_loses_unit_when_basket_write_fails(self):
        coord, stock, basket = make_coordinator(
            stock_records=[product_record("eggs", "Eggs", 2)],
            basket_store=FailingDocumentStore(fail_on=("insert",)),
        )

        with pytest.raises(StorageError):
            asyncio.run(coord.add_to_basket("eggs"))

        # Stock was debited, basket never credited; nothing rolls back.
        assert asyncio.run(units_by_name(stock, basket, "Eggs")) == (1, 0)

    def test_return_double_counts_when_basket_debit_fails(self):
        coord, stock, basket = make_coordinator(
            stock_records=[product_record("eggs", "Eggs", 1)],
            basket_store=FailingDocumentStore(
                [basket_record("b1", "eggs", "Eggs", 2)], fail_on=("update",)
            ),
        )

        with pytest.raises(StorageError):
            asyncio.run(coord.return_to_stock("b1"))

        # Stock credit happens first, so the unit is counted in both ledgers.
        assert asyncio.run(units_by_name(stock, basket, "Eggs")) == (2, 2)

    def test_logout_drain_failure_keeps_other_items_drained(self):
        coord, stock, basket = make_coordinator(
            stock_records=[product_record("eggs", "Eggs", 1), product_record("milk", "Milk", 1)],
            basket_store=FailingDocumentStore(
                [basket_record("b1", "eggs", "Eggs", 2), basket_record("b2", "milk", "Milk", 3)],
                fail_on=("remove",),
                fail_ids=("b1",),
            ),
        )

        with pytest.raises(StorageError):
            asyncio.run(coord.logout_drain())

        assert asyncio.run(units_by_name(stock, basket, "Milk")) == (4, 0)
        # Eggs were credited but the basket entry could not be removed.
        assert asyncio.run(units_by_name(stock, basket, "Eggs")) == (3, 2)
