"""Store component and helper functions for single-resource bays."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Store:
    """Mutable single-resource bay.

    Attributes:
        amount: Units currently held.
        capacity: Maximum units held (-1 for unbounded).
    """

    amount: int = 0
    capacity: int = -1


class StoreHelper:
    """Pure functions for store manipulation."""

    @staticmethod
    def free(store: Store) -> int:
        """Units that can still be added. Unbounded stores report a large sentinel."""
        if store.capacity == -1:
            return 1 << 30
        return max(0, store.capacity - store.amount)

    @staticmethod
    def is_full(store: Store | None) -> bool:
        """Full means amount == capacity. Unbounded and missing stores are never full."""
        if store is None or store.capacity == -1:
            return False
        return store.amount >= store.capacity

    @staticmethod
    def is_empty(store: Store | None) -> bool:
        """Missing stores count as empty."""
        return store is None or store.amount <= 0

    @staticmethod
    def fill_ratio(store: Store) -> float:
        if store.capacity <= 0:
            return 0.0
        return store.amount / store.capacity

    @staticmethod
    def add(store: Store, amount: int) -> int:
        """Add units, respecting capacity. Returns amount actually added."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        actual = min(amount, StoreHelper.free(store))
        store.amount += actual
        return actual

    @staticmethod
    def remove(store: Store, amount: int) -> int:
        """Remove units. Returns amount actually removed."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        actual = min(amount, store.amount)
        store.amount -= actual
        return actual

    @staticmethod
    def transfer(source: Store, target: Store, amount: int | None = None) -> int:
        """Move units between stores. ``None`` moves as much as fits."""
        if amount is None:
            amount = source.amount
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        moved = min(amount, source.amount, StoreHelper.free(target))
        source.amount -= moved
        target.amount += moved
        return moved
