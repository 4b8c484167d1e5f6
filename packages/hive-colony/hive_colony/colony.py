"""Colony - the facade that owns the engine, memory and every colony service."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from hive import Engine, EventLog
from hive_spatial import GridMover, Mover, PathNode, Pos, TerrainMap
from hive_store import Decay, Regen, Store, make_decay_system, make_regen_system

from hive_colony import basic
from hive_colony.access import AccessPoints
from hive_colony.actions import Actions, WorldActions
from hive_colony.census import Census
from hive_colony.components import (
    COLONY_COMPONENTS, CONTAINER, ROAD, Agent, Controller, ResourceNode, Structure,
)
from hive_colony.config import ColonyConfig
from hive_colony.lifecycle import make_death_system
from hive_colony.memory import MemoryStore, SlotMemory
from hive_colony.population import PopulationController
from hive_colony.registry import ProfileRegistry, default_profiles
from hive_colony.resolver import AssignmentResolver
from hive_colony.snapshot import ColonySnapshot
from hive_colony.steps import make_scripted_machine
from hive_colony.structures import StructureRegistry, default_structures
from hive_colony.systems import (
    make_census_system, make_dispatch_system, make_gc_system,
    make_population_system, make_spawning_system, make_structure_system, make_survey_system,
)

if TYPE_CHECKING:
    from hive import EntityId, World

    from hive_colony.profiles import Profile

_WALKABLE = (ROAD, CONTAINER)


def occupied(world: World, eid: EntityId, zone: str, x: int, y: int) -> bool:
    """True when a body other than *eid* blocks the tile."""
    for other, (pos,) in world.query(Pos):
        if other == eid or pos.zone != zone or pos.x != x or pos.y != y:
            continue
        if world.has(other, Agent) or world.has(other, ResourceNode) or world.has(other, Controller):
            return True
        structure = world.find(other, Structure)
        if structure is not None and structure.kind not in _WALKABLE:
            return True
    return False


class Colony:
    """A tick-driven colony of worker agents.

    Owns the :class:`~hive.Engine` and installs the colony systems in tick
    order: lifecycle, garbage collection, access-point survey, census,
    spawning progress, population plan, agent dispatch, structures,
    regeneration and pile decay. Hosts drive it with :meth:`tick` or
    :meth:`run`.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        *,
        config: ColonyConfig | None = None,
        profiles: ProfileRegistry | None = None,
        structures: StructureRegistry | None = None,
        mover: Mover | None = None,
        actions: Actions | None = None,
        seed: int | None = None,
    ) -> None:
        self.engine = engine if engine is not None else Engine(seed=seed)
        self.config = config if config is not None else ColonyConfig()
        self.profiles = profiles if profiles is not None else default_profiles()
        self.structures = structures if structures is not None else default_structures()
        self.memory = MemoryStore()
        self.events = EventLog(self.config.event_log_size)
        self.terrains: dict[str, TerrainMap] = {}
        self.mover: Mover = mover if mover is not None else GridMover(self.terrains, occupied)
        self.actions: Actions = actions if actions is not None else WorldActions(self.config)
        self.census = Census()
        self.access = AccessPoints(self.world, self.memory, self.terrains)
        self.resolver = AssignmentResolver(self)
        self.population = PopulationController(self)
        self.machine = make_scripted_machine(self.config.max_chain)
        self.survey_requested = False
        self._snapshot = ColonySnapshot(self.memory, self.events, self.terrains)

        for ctype in COLONY_COMPONENTS + (Pos, Store, Regen, Decay):
            self.world.register_component(ctype)
        self.world.on_despawn(self._release_despawned)
        for system in (
            make_death_system(self),
            make_gc_system(self),
            make_survey_system(self),
            make_census_system(self),
            make_spawning_system(self),
            make_population_system(self),
            make_dispatch_system(self),
            make_structure_system(self),
            make_regen_system(),
            make_decay_system(),
        ):
            self.engine.add_system(system)

    @property
    def world(self) -> World:
        return self.engine.world

    @property
    def tick_number(self) -> int:
        return self.engine.tick_number

    # -- Host surface --

    def tick(self) -> None:
        self.engine.tick()

    def run(self, n: int) -> None:
        self.engine.run(n)

    def add_terrain(self, zone: str, terrain: TerrainMap) -> None:
        """Register *zone*'s terrain; access points are surveyed again next tick."""
        self.terrains[zone] = terrain
        self.survey_requested = True

    def plan_slot(
        self,
        zone: str,
        name: str,
        role: str,
        start: tuple[int, int] | Sequence[int],
        source: EntityId | None = None,
        target: EntityId | None = None,
        path: list[PathNode] | None = None,
    ) -> SlotMemory:
        """Declare (or redefine) a slot of *zone*, keeping the agent bound to it."""
        if role not in self.profiles:
            raise KeyError(f"Unknown role: {role!r}")
        slots = self.memory.zone(zone).slots
        previous = slots.get(name)
        slot = SlotMemory(
            role=role,
            start=[int(start[0]), int(start[1])],
            source=source,
            target=target,
            path=[list(node) for node in path] if path else None,
            agent=previous.agent if previous is not None else None,
        )
        slots[name] = slot
        return slot

    def set_zone_spawner(self, zone: str, spawner: EntityId) -> None:
        self.memory.zone(zone).spawn = spawner

    def spawn(self, role: str, **options: Any) -> EntityId | None:
        """Spawn an agent of *role*; see :meth:`PopulationController.spawn`."""
        return self.population.spawn(self.profiles.get(role), **options)

    def _release_despawned(self, world: World, eid: EntityId) -> None:
        if world.has(eid, Agent):
            self.access.release(eid)

    def work(self, profile: Profile, eid: EntityId) -> None:
        """Run one tick of work for *eid*: its slot's step machine, or the basic loop."""
        mem = self.memory.agent(eid)
        if mem.slot is not None:
            mem.step = self.machine.advance(mem.step, self, profile, eid)
        else:
            basic.work(self, profile, eid)

    # -- Persistence --

    def snapshot(self) -> dict[str, Any]:
        return self._snapshot.snapshot(self.engine)

    def restore(self, data: dict[str, Any]) -> None:
        self._snapshot.restore(self.engine, data)
