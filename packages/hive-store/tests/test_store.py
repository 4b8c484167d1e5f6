"""Tests for Store and StoreHelper."""
from __future__ import annotations

import pytest

from hive_store import Store, StoreHelper


class TestStoreState:
    def test_full_means_amount_equals_capacity(self) -> None:
        assert StoreHelper.is_full(Store(amount=50, capacity=50))
        assert not StoreHelper.is_full(Store(amount=49, capacity=50))

    def test_unbounded_and_missing_never_full(self) -> None:
        assert not StoreHelper.is_full(Store(amount=10**6))
        assert not StoreHelper.is_full(None)

    def test_missing_counts_as_empty(self) -> None:
        assert StoreHelper.is_empty(None)
        assert StoreHelper.is_empty(Store(amount=0, capacity=5))
        assert not StoreHelper.is_empty(Store(amount=1, capacity=5))

    def test_fill_ratio(self) -> None:
        assert StoreHelper.fill_ratio(Store(amount=25, capacity=100)) == 0.25
        assert StoreHelper.fill_ratio(Store(amount=5)) == 0.0


class TestStoreMutation:
    def test_add_respects_capacity(self) -> None:
        store = Store(amount=40, capacity=50)
        assert StoreHelper.add(store, 30) == 10
        assert store.amount == 50

    def test_remove_clamps_to_amount(self) -> None:
        store = Store(amount=5, capacity=50)
        assert StoreHelper.remove(store, 30) == 5
        assert store.amount == 0

    def test_negative_amounts_rejected(self) -> None:
        store = Store(amount=5, capacity=50)
        with pytest.raises(ValueError):
            StoreHelper.add(store, -1)
        with pytest.raises(ValueError):
            StoreHelper.remove(store, -1)
        with pytest.raises(ValueError):
            StoreHelper.transfer(store, Store(), -1)

    def test_transfer_moves_what_fits(self) -> None:
        source = Store(amount=50, capacity=50)
        target = Store(amount=280, capacity=300)
        assert StoreHelper.transfer(source, target) == 20
        assert source.amount == 30
        assert target.amount == 300

    def test_transfer_limited_amount(self) -> None:
        source = Store(amount=50, capacity=50)
        target = Store(amount=0, capacity=300)
        assert StoreHelper.transfer(source, target, 10) == 10
        assert (source.amount, target.amount) == (40, 10)
