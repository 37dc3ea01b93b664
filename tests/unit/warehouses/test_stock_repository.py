"""Unit tests for the stock ledger SQL repository."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from modules.warehouses.models import StockAllocation

pytestmark = pytest.mark.unit


def _quantity(product, warehouse) -> int:
    return StockAllocation.objects.get(product=product, warehouse=warehouse).quantity


class TestAddQuantity:
    def test_inserts_row_when_absent(self, stock_repo, product, warehouse):
        stock_repo.add_quantity(product.id, warehouse.id, 7)

        assert _quantity(product, warehouse) == 7

    def test_increments_existing_row(self, stock_repo, product, warehouse, stock):
        stock(product, warehouse, 3)

        stock_repo.add_quantity(product.id, warehouse.id, 4)

        assert _quantity(product, warehouse) == 7
        assert StockAllocation.objects.filter(product=product).count() == 1

    def test_row_created_concurrently_is_incremented(
        self, stock_repo, product, warehouse, stock
    ):
        stock(product, warehouse, 5)
        real_increment = stock_repo._increment
        missed = []

        def increment(*args):
            # The first UPDATE ran before another writer inserted the row.
            if not missed:
                missed.append(args)
                return 0
            return real_increment(*args)

        with patch.object(stock_repo, "_increment", side_effect=increment):
            stock_repo.add_quantity(product.id, warehouse.id, 3)

        assert len(missed) == 1
        assert _quantity(product, warehouse) == 8
        assert StockAllocation.objects.filter(product=product).count() == 1


class TestReduceQuantity:
    def test_subtracts_amount(self, stock_repo, product, warehouse, stock):
        stock(product, warehouse, 10)

        stock_repo.reduce_quantity(product.id, warehouse.id, 4)

        assert _quantity(product, warehouse) == 6

    def test_clamps_at_zero(self, stock_repo, product, warehouse, stock):
        stock(product, warehouse, 3)

        stock_repo.reduce_quantity(product.id, warehouse.id, 10)

        assert _quantity(product, warehouse) == 0

    def test_missing_row_is_noop(self, stock_repo, product, warehouse):
        stock_repo.reduce_quantity(product.id, warehouse.id, 5)

        assert not StockAllocation.objects.filter(product=product).exists()

    @pytest.mark.parametrize(
        "before, amount, expected",
        [(5, 5, 0), (5, 1, 4), (0, 3, 0), (1, 1000, 0)],
    )
    def test_result_is_never_negative(
        self, stock_repo, product, warehouse, stock, before, amount, expected
    ):
        stock(product, warehouse, before)

        stock_repo.reduce_quantity(product.id, warehouse.id, amount)

        assert _quantity(product, warehouse) == expected


class TestSums:
    def test_sum_by_product_without_rows_is_zero(self, stock_repo, product):
        assert stock_repo.sum_by_product(product.id) == 0

    def test_sum_by_warehouse_without_rows_is_zero(self, stock_repo, warehouse):
        assert stock_repo.sum_by_warehouse(warehouse.id) == 0

    def test_sum_by_product_tracks_mixed_changes(
        self, stock_repo, product, make_warehouse
    ):
        first, second = make_warehouse(), make_warehouse()

        stock_repo.add_quantity(product.id, first.id, 10)
        stock_repo.add_quantity(product.id, second.id, 5)
        stock_repo.reduce_quantity(product.id, first.id, 3)
        stock_repo.reduce_quantity(product.id, second.id, 8)
        stock_repo.add_quantity(product.id, second.id, 2)

        rows = StockAllocation.objects.filter(product=product)
        assert stock_repo.sum_by_product(product.id) == sum(r.quantity for r in rows)
        assert stock_repo.sum_by_product(product.id) == 9

    def test_sum_by_warehouse_spans_products(
        self, stock_repo, make_product, warehouse, stock
    ):
        stock(make_product(name="A"), warehouse, 4)
        stock(make_product(name="B"), warehouse, 6)

        assert stock_repo.sum_by_warehouse(warehouse.id) == 10


class TestAllocations:
    def test_ordered_by_warehouse(self, stock_repo, product, make_warehouse, stock):
        first, second, third = make_warehouse(), make_warehouse(), make_warehouse()
        stock(product, third, 1)
        stock(product, first, 2)
        stock(product, second, 3)

        allocations = stock_repo.allocations_for_product(product.id, lock=True)

        assert [a.warehouse_id for a in allocations] == [first.id, second.id, third.id]
        assert [a.quantity for a in allocations] == [2, 3, 1]

    def test_delete_for_product(self, stock_repo, make_product, make_warehouse, stock):
        kept, removed = make_product(name="Kept"), make_product(name="Removed")
        w1, w2 = make_warehouse(), make_warehouse()
        stock(removed, w1, 1)
        stock(removed, w2, 1)
        stock(kept, w1, 1)

        assert stock_repo.delete_for_product(removed.id) == 2
        assert list(StockAllocation.objects.values_list("product_id", flat=True)) == [kept.id]
