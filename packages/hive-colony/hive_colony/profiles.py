"""Behavior profiles: the hooks and flags that describe a role.

Concrete roles subclass :class:`Profile` and override only what differs.
Hooks receive the colony and an entity id; ``context`` hooks accept any
positioned entity (an agent, or a spawner planning a new agent).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from hive_spatial import Pos, nearest
from hive_store import Store, StoreHelper

from hive_colony.bodies import CARRY, MOVE, WORK
from hive_colony.components import (
    CONTAINER, EXTENSION, SPAWN, STORAGE, Pile, ResourceNode, Structure,
)
from hive_colony.outcomes import Outcome

if TYPE_CHECKING:
    from hive import EntityId, World

    from hive_colony.colony import Colony


def has_energy(world: World, eid: EntityId) -> bool:
    return not StoreHelper.is_empty(world.find(eid, Store))


def not_full(world: World, eid: EntityId) -> bool:
    store = world.find(eid, Store)
    return store is not None and not StoreHelper.is_full(store)


def is_kind(*kinds: str):
    def _check(world: World, eid: EntityId) -> bool:
        structure = world.find(eid, Structure)
        return structure is not None and structure.kind in kinds
    return _check


class Profile:
    """The base worker: takes resource from the nearest source, feeds the nearest sink."""

    role: ClassVar[str] = "worker"
    body: ClassVar[tuple[str, ...]] = (CARRY, MOVE, WORK)
    source_work: ClassVar[bool] = True
    target_work: ClassVar[bool] = True
    single_source: ClassVar[bool] = False
    single_target: ClassVar[bool] = False
    find_next_target: ClassVar[bool] = False
    speed: ClassVar[int] = 1
    target_range: ClassVar[int] = 1
    target_duration: ClassVar[int | None] = None
    auto_spawn: ClassVar[bool] = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} role={self.role!r}>"

    # -- Readiness --

    def can_work_source(self, colony: Colony, eid: EntityId) -> bool:
        return not StoreHelper.is_full(colony.world.find(eid, Store))

    def can_work_target(self, colony: Colony, eid: EntityId) -> bool:
        return not StoreHelper.is_empty(colony.world.find(eid, Store))

    # -- Candidates --

    def sources(self, colony: Colony, context: EntityId) -> list[EntityId]:
        if not self.source_work:
            return []
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        found = nearest(world, origin, Pile, Store, where=has_energy)
        if found is None:
            found = nearest(
                world, origin, Structure, Store,
                where=lambda w, e: is_kind(CONTAINER, STORAGE)(w, e) and has_energy(w, e),
            )
        if found is None:
            found = nearest(
                world, origin, ResourceNode, Store,
                where=lambda w, e: has_energy(w, e) and colony.access.can_bind(e, context),
            )
        return [found] if found is not None else []

    def targets(self, colony: Colony, context: EntityId) -> list[EntityId]:
        if not self.target_work:
            return []
        world = colony.world
        origin = world.find(context, Pos)
        if origin is None:
            return []
        for kinds in ((EXTENSION,), (SPAWN,), (CONTAINER, STORAGE)):
            check = is_kind(*kinds)
            found = nearest(
                world, origin, Structure, Store,
                where=lambda w, e: check(w, e) and not_full(w, e),
            )
            if found is not None:
                return [found]
        return []

    # -- Jobs --

    def source_job(self, colony: Colony, eid: EntityId) -> Outcome:
        source = colony.memory.agent(eid).source
        return colony.actions.get_energy(colony.world, eid, source)

    def target_job(self, colony: Colony, eid: EntityId) -> Outcome:
        target = colony.memory.agent(eid).target
        return colony.actions.put_energy(colony.world, eid, target)

    def source_job_done(self, colony: Colony, eid: EntityId) -> bool:
        """Done once the bound source holds nothing more to take."""
        if not self.source_work:
            return True
        source = colony.memory.agent(eid).source
        return StoreHelper.is_empty(colony.world.find(source, Store))

    def target_job_done(self, colony: Colony, eid: EntityId) -> bool:
        """Done once the bound target is full."""
        if not self.target_work:
            return True
        target = colony.memory.agent(eid).target
        return StoreHelper.is_full(colony.world.find(target, Store))
