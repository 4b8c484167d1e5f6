"""Low-level resource actions between an agent and a world entity.

Every action is total: it reports an :class:`Outcome` and never raises for
absent or mistyped entities.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from hive_spatial import Pos, in_range
from hive_store import Decay, Store, StoreHelper

from hive_colony.bodies import WORK, count_parts
from hive_colony.components import (
    Agent, Controller, Durability, Pile, ResourceNode, Structure,
)
from hive_colony.config import ColonyConfig
from hive_colony.outcomes import Outcome

if TYPE_CHECKING:
    from hive import EntityId, World

TRANSFER_RANGE = 1
WORK_RANGE = 3


class Actions(Protocol):
    def extract(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome: ...
    def pickup(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome: ...
    def withdraw(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome: ...
    def deliver(
        self, world: World, eid: EntityId, target: EntityId | None, amount: int | None = None,
    ) -> Outcome: ...
    def repair(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome: ...
    def upgrade(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome: ...
    def drop(self, world: World, eid: EntityId, amount: int | None = None) -> Outcome: ...
    def get_energy(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome: ...
    def put_energy(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome: ...


class WorldActions:
    """Reference actions over ``Store`` components.

    Transfers need the agent within one tile of the other entity; repair and
    upgrade work from three tiles away. Agents without WORK parts cannot
    extract, repair or upgrade.
    """

    def __init__(self, config: ColonyConfig | None = None) -> None:
        self._config = config if config is not None else ColonyConfig()

    def _bay(self, world: World, eid: EntityId) -> Store | None:
        if not world.has(eid, Agent):
            return None
        return world.find(eid, Store)

    def _work_parts(self, world: World, eid: EntityId) -> int:
        agent = world.find(eid, Agent)
        return count_parts(agent.body, WORK) if agent is not None else 0

    def _take(
        self, world: World, eid: EntityId, source: EntityId | None, marker: type,
        amount: int | None = None,
    ) -> Outcome:
        bay = self._bay(world, eid)
        store = world.find(source, Store)
        if bay is None or store is None or not world.has(source, marker):
            return Outcome.INVALID_TARGET
        if not in_range(world, eid, source, TRANSFER_RANGE):
            return Outcome.NOT_IN_RANGE
        if StoreHelper.is_empty(store):
            return Outcome.EMPTY
        if StoreHelper.is_full(bay):
            return Outcome.FULL
        StoreHelper.transfer(store, bay, amount)
        return Outcome.OK

    def extract(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome:
        work = self._work_parts(world, eid)
        if work == 0:
            return Outcome.INVALID_TARGET
        return self._take(
            world, eid, source, ResourceNode, work * self._config.harvest_per_work,
        )

    def pickup(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome:
        return self._take(world, eid, source, Pile)

    def withdraw(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome:
        return self._take(world, eid, source, Structure)

    def deliver(
        self, world: World, eid: EntityId, target: EntityId | None, amount: int | None = None,
    ) -> Outcome:
        bay = self._bay(world, eid)
        store = world.find(target, Store)
        if bay is None or store is None or target == eid:
            return Outcome.INVALID_TARGET
        if not in_range(world, eid, target, TRANSFER_RANGE):
            return Outcome.NOT_IN_RANGE
        if StoreHelper.is_empty(bay):
            return Outcome.EMPTY
        if StoreHelper.is_full(store):
            return Outcome.FULL
        StoreHelper.transfer(bay, store, amount)
        return Outcome.OK

    def repair(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome:
        bay = self._bay(world, eid)
        durability = world.find(target, Durability)
        work = self._work_parts(world, eid)
        if bay is None or durability is None or work == 0:
            return Outcome.INVALID_TARGET
        if not in_range(world, eid, target, WORK_RANGE):
            return Outcome.NOT_IN_RANGE
        if StoreHelper.is_empty(bay):
            return Outcome.EMPTY
        if durability.hits >= durability.hits_max:
            return Outcome.FULL
        energy = min(work, bay.amount)
        bay.amount -= energy
        durability.hits = min(
            durability.hits_max, durability.hits + energy * self._config.repair_per_work,
        )
        return Outcome.OK

    def upgrade(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome:
        bay = self._bay(world, eid)
        controller = world.find(target, Controller)
        work = self._work_parts(world, eid)
        if bay is None or controller is None or work == 0 or controller.progress_total <= 0:
            return Outcome.INVALID_TARGET
        if not in_range(world, eid, target, WORK_RANGE):
            return Outcome.NOT_IN_RANGE
        if StoreHelper.is_empty(bay):
            return Outcome.EMPTY
        energy = min(work, bay.amount)
        bay.amount -= energy
        controller.progress += energy
        while controller.progress >= controller.progress_total:
            controller.progress -= controller.progress_total
            controller.level += 1
            controller.progress_total *= 2
        return Outcome.OK

    def drop(self, world: World, eid: EntityId, amount: int | None = None) -> Outcome:
        """Drop resource on the agent's tile, merging into a pile already there."""
        bay = self._bay(world, eid)
        pos = world.find(eid, Pos)
        if bay is None or pos is None:
            return Outcome.INVALID_TARGET
        if StoreHelper.is_empty(bay):
            return Outcome.EMPTY
        pile = drop_pile(world, pos)
        StoreHelper.transfer(bay, world.get(pile, Store), amount)
        return Outcome.OK

    def get_energy(self, world: World, eid: EntityId, source: EntityId | None) -> Outcome:
        """Take resource from *source* with whichever action fits its kind."""
        if world.has(source, ResourceNode):
            return self.extract(world, eid, source)
        if world.has(source, Pile):
            return self.pickup(world, eid, source)
        if world.has(source, Structure):
            return self.withdraw(world, eid, source)
        return Outcome.INVALID_TARGET

    def put_energy(self, world: World, eid: EntityId, target: EntityId | None) -> Outcome:
        if world.has(target, Controller):
            return self.upgrade(world, eid, target)
        return self.deliver(world, eid, target)


def drop_pile(world: World, pos: Pos) -> EntityId:
    """The pile on *pos*, created empty when the tile holds none."""
    for eid, (pile_pos, _pile) in world.query(Pos, Pile):
        if (pile_pos.zone, pile_pos.x, pile_pos.y) == (pos.zone, pos.x, pos.y):
            return eid
    eid = world.spawn()
    world.attach(eid, Pos(pos.zone, pos.x, pos.y))
    world.attach(eid, Pile())
    world.attach(eid, Store(amount=0, capacity=-1))
    world.attach(eid, Decay())
    return eid
