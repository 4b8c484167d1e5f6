"""Per-kind structure behavior run once per tick."""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping

from hive_spatial import Pos, find_all
from hive_store import Store

from hive_colony.components import TOWER, Durability, Structure
from hive_colony.roles import hits_ratio, wounded

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony

StructureHandler = Callable[["Colony", "EntityId"], None]


def run_tower(colony: Colony, eid: EntityId) -> None:
    """Repair the most damaged structure of the tower's zone."""
    world = colony.world
    config = colony.config
    store = world.find(eid, Store)
    pos = world.find(eid, Pos)
    if store is None or pos is None or store.amount < config.tower_cost:
        return
    damaged = find_all(world, pos.zone, Durability, where=wounded)
    if not damaged:
        return
    worst = min(damaged, key=lambda e: hits_ratio(world, e))
    durability = world.get(worst, Durability)
    durability.hits = min(durability.hits_max, durability.hits + config.tower_repair)
    store.amount -= config.tower_cost


class StructureRegistry:
    """Structure kind mapped to its handler, fixed at construction."""

    def __init__(self, handlers: Mapping[str, StructureHandler]) -> None:
        self._handlers = MappingProxyType(dict(handlers))

    def find(self, kind: str) -> StructureHandler | None:
        return self._handlers.get(kind)

    def kinds(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def run(self, colony: Colony) -> None:
        for eid, (structure,) in list(colony.world.query(Structure)):
            handler = self._handlers.get(structure.kind)
            if handler is not None:
                handler(colony, eid)


def default_structures() -> StructureRegistry:
    return StructureRegistry({TOWER: run_tower})
