"""Concrete roles built on the base profile."""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_spatial import Pos, by_range, find_all
from hive_store import Store, StoreHelper

from hive_colony.bodies import CARRY, MOVE, WORK
from hive_colony.components import TOWER, Agent, Controller, Durability, Pile, ResourceNode
from hive_colony.outcomes import Outcome
from hive_colony.profiles import Profile, has_energy, is_kind, not_full

if TYPE_CHECKING:
    from hive import EntityId, World

    from hive_colony.colony import Colony


def wounded(world: World, eid: EntityId) -> bool:
    durability = world.find(eid, Durability)
    return durability is not None and durability.hits < durability.hits_max


def hits_ratio(world: World, eid: EntityId) -> float:
    durability = world.find(eid, Durability)
    if durability is None or durability.hits_max <= 0:
        return 1.0
    return durability.hits / durability.hits_max


class Harvester(Profile):
    """Works extraction nodes only, one access point each."""

    role = "harvester"
    body = (WORK, WORK, CARRY, MOVE)
    auto_spawn = True

    def sources(self, colony: Colony, context: EntityId) -> list[EntityId]:
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        nodes = find_all(
            world, origin.zone, ResourceNode, Store,
            where=lambda w, e: has_energy(w, e) and colony.access.can_bind(e, context),
        )
        return by_range(world, origin, nodes)


class Carrier(Harvester):
    """Fast hauler: picks up dropped piles and feeds sinks, then towers, then working agents."""

    role = "carrier"
    body = (CARRY, CARRY, CARRY, CARRY, CARRY, MOVE, MOVE, MOVE, MOVE, MOVE)
    speed = 2
    find_next_target = True

    def source_job(self, colony: Colony, eid: EntityId) -> Outcome:
        source = colony.memory.agent(eid).source
        return colony.actions.pickup(colony.world, eid, source)

    def sources(self, colony: Colony, context: EntityId) -> list[EntityId]:
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        piles = by_range(world, origin, find_all(world, origin.zone, Pile, Store, where=has_energy))
        # least contended first; by_range already ordered equal counts by distance
        return sorted(piles, key=lambda pile: colony.census.source_count(pile, context))

    def targets(self, colony: Colony, context: EntityId) -> list[EntityId]:
        found = super().targets(colony, context)
        if found:
            return found
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        towers = find_all(
            world, origin.zone, Store,
            where=lambda w, e: is_kind(TOWER)(w, e) and not_full(w, e),
        )
        if towers:
            return by_range(world, origin, towers)
        for role in (Repairer.role, Upgrader.role):
            agents = find_all(
                world, origin.zone, Agent, Store,
                where=lambda w, e: e != context and w.get(e, Agent).role == role and not_full(w, e),
            )
            if agents:
                return sorted(agents, key=lambda e: StoreHelper.fill_ratio(world.get(e, Store)))
        return []


class Repairer(Profile):
    """Mends the most damaged structures of its zone with resource brought to it."""

    role = "repairer"
    body = (CARRY, CARRY, CARRY, MOVE, MOVE, MOVE, WORK, WORK, WORK)
    source_work = False
    target_range = 3
    target_duration = 20
    auto_spawn = True

    def targets(self, colony: Colony, context: EntityId) -> list[EntityId]:
        """Every wounded structure sharing the lowest rounded hits percentage."""
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        lowest = 1000
        found: list[EntityId] = []
        for eid in find_all(world, origin.zone, Durability, where=wounded):
            ratio = round(hits_ratio(world, eid) * 100)
            if ratio < lowest:
                lowest, found = ratio, [eid]
            elif ratio == lowest:
                found.append(eid)
        return by_range(world, origin, found)

    def target_job(self, colony: Colony, eid: EntityId) -> Outcome:
        target = colony.memory.agent(eid).target
        return colony.actions.repair(colony.world, eid, target)

    def target_job_done(self, colony: Colony, eid: EntityId) -> bool:
        return not wounded(colony.world, colony.memory.agent(eid).target)


class Upgrader(Profile):
    """Pours resource into the zone controller, forever."""

    role = "upgrader"
    body = (CARRY, CARRY, MOVE, WORK, WORK, WORK, WORK)
    source_work = False
    target_range = 3
    auto_spawn = True

    def sources(self, colony: Colony, context: EntityId) -> list[EntityId]:
        return []

    def targets(self, colony: Colony, context: EntityId) -> list[EntityId]:
        origin = colony.world.find(context, Pos)
        if origin is None:
            return []
        return find_all(colony.world, origin.zone, Controller)[:1]

    def target_job(self, colony: Colony, eid: EntityId) -> Outcome:
        target = colony.memory.agent(eid).target
        return colony.actions.upgrade(colony.world, eid, target)

    def target_job_done(self, colony: Colony, eid: EntityId) -> bool:
        return False
