"""Helpers that place colony entities in a world.

Each helper returns the entity id and accepts an explicit one, so layouts can
use stable names across restarts.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_spatial import Pos
from hive_store import Decay, Regen, Store

from hive_colony.components import (
    CONTAINER, EXTENSION, SPAWN, STORAGE, TOWER,
    Controller, Durability, Pile, ResourceNode, Spawner, Structure,
)

if TYPE_CHECKING:
    from hive import EntityId, World

_CAPACITY = {SPAWN: 300, EXTENSION: 50, CONTAINER: 2000, STORAGE: 1_000_000, TOWER: 1000}
_HITS = {SPAWN: 5000, EXTENSION: 1000, CONTAINER: 250_000, STORAGE: 10_000, TOWER: 3000}


def _place(world: World, zone: str, x: int, y: int, eid: EntityId | None) -> EntityId:
    eid = world.spawn(eid)
    world.attach(eid, Pos(zone, x, y))
    return eid


def add_node(
    world: World, zone: str, x: int, y: int, *,
    capacity: int = 3000, amount: int | None = None, interval: int = 300,
    eid: EntityId | None = None,
) -> EntityId:
    """Extraction node refilled to *capacity* every *interval* ticks once drawn."""
    eid = _place(world, zone, x, y, eid)
    world.attach(eid, ResourceNode())
    world.attach(eid, Store(amount=capacity if amount is None else amount, capacity=capacity))
    world.attach(eid, Regen(interval=interval))
    return eid


def add_pile(
    world: World, zone: str, x: int, y: int, amount: int, *, eid: EntityId | None = None,
) -> EntityId:
    eid = _place(world, zone, x, y, eid)
    world.attach(eid, Pile())
    world.attach(eid, Store(amount=amount, capacity=-1))
    world.attach(eid, Decay())
    return eid


def add_structure(
    world: World, kind: str, zone: str, x: int, y: int, *,
    amount: int = 0, capacity: int | None = None,
    hits: int | None = None, hits_max: int | None = None,
    eid: EntityId | None = None,
) -> EntityId:
    """Structure of *kind*. Kinds with a known capacity get a Store; all get Durability.

    Unspecified capacity and hits use the kind's usual values.
    """
    eid = _place(world, zone, x, y, eid)
    world.attach(eid, Structure(kind))
    if capacity is None:
        capacity = _CAPACITY.get(kind)
    if capacity is not None:
        world.attach(eid, Store(amount=amount, capacity=capacity))
    if hits_max is None:
        hits_max = _HITS.get(kind, 5000)
    world.attach(eid, Durability(hits=hits_max if hits is None else hits, hits_max=hits_max))
    return eid


def add_spawner(
    world: World, zone: str, x: int, y: int, *,
    amount: int = 300, capacity: int = 300, eid: EntityId | None = None,
) -> EntityId:
    eid = add_structure(world, SPAWN, zone, x, y, amount=amount, capacity=capacity, eid=eid)
    world.attach(eid, Spawner())
    return eid


def add_controller(
    world: World, zone: str, x: int, y: int, *, level: int = 1, eid: EntityId | None = None,
) -> EntityId:
    eid = _place(world, zone, x, y, eid)
    world.attach(eid, Controller(level=level))
    return eid
