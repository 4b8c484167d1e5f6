"""Shared type aliases and errors for the hive engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

EntityId = str


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    request_stop: Callable[[], None]
    random: _random.Random


class DeadEntityError(KeyError):
    """Raised when strictly reading a component of an entity that is not alive."""

    def __init__(self, entity_id: EntityId, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, unregistered component type)."""


if TYPE_CHECKING:
    from hive.world import World

System = Callable[["World", TickContext], None]
