"""Population controller: decides when to create agents and seeds their memory."""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_spatial import Pos, find_all
from hive_store import Store

from hive_colony.bodies import affordable_composition, body_cost, carry_capacity
from hive_colony.components import EXTENSION, SPAWN, Agent, Lifecycle, ResourceNode, Spawner, Structure
from hive_colony.steps import SPAWNING

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony
    from hive_colony.profiles import Profile

AUTO = "AUTO"
"""Resolve the source or target through the profile against the spawner."""

ENERGY = "ENERGY"
"""Use the first extraction node with a free access point as source."""


class PopulationController:
    def __init__(self, colony: Colony) -> None:
        self._colony = colony

    # -- Spawners and budget --

    def spawners(self, zone: str | None = None) -> list[EntityId]:
        world = self._colony.world
        if zone is not None:
            return find_all(world, zone, Spawner)
        return [eid for eid, _ in world.query(Spawner, Pos)]

    def is_busy(self, spawner: EntityId) -> bool:
        state = self._colony.world.find(spawner, Spawner)
        return state is None or state.spawning is not None

    def idle_spawner(self, zone: str | None = None) -> EntityId | None:
        for spawner in self.spawners(zone):
            if not self.is_busy(spawner):
                return spawner
        return None

    def _feeders(self, zone: str) -> list[EntityId]:
        """Spawn stores first, then extension stores, of *zone*."""
        world = self._colony.world
        found = find_all(world, zone, Structure, Store)
        return [
            eid for kind in (SPAWN, EXTENSION)
            for eid in found if world.get(eid, Structure).kind == kind
        ]

    def budget(self, zone: str) -> int:
        world = self._colony.world
        return sum(world.get(eid, Store).amount for eid in self._feeders(zone))

    def _pay(self, zone: str, cost: int) -> None:
        world = self._colony.world
        for eid in self._feeders(zone):
            if cost <= 0:
                break
            store = world.get(eid, Store)
            paid = min(store.amount, cost)
            store.amount -= paid
            cost -= paid

    def _zone_of(self, ref: EntityId | None) -> str | None:
        if ref is None or ref in (AUTO, ENERGY):
            return None
        pos = self._colony.world.find(ref, Pos)
        return pos.zone if pos is not None else None

    def _resolve_spawner(
        self, spawn: EntityId | None, source: EntityId | None, target: EntityId | None,
        zone: str | None,
    ) -> EntityId | None:
        colony = self._colony
        if spawn is not None:
            return spawn if colony.world.has(spawn, Spawner) else None
        zones = [z for z in (self._zone_of(source), self._zone_of(target), zone) if z is not None]
        for name in zones:
            memory = colony.memory.zones.get(name)
            if memory is not None and colony.world.has(memory.spawn, Spawner):
                return memory.spawn
        for name in zones:
            found = self.idle_spawner(name)
            if found is not None:
                return found
        if zones:
            return None
        found = self.idle_spawner()
        if found is None:
            spawners = self.spawners()
            found = spawners[0] if spawners else None
        return found

    def choose_name(self, role: str) -> EntityId:
        """First ``<role>-<n>`` not used by a live entity or a remembered agent."""
        colony = self._colony
        n = 1
        while True:
            name = f"{role}-{n}"
            if not colony.world.alive(name) and colony.memory.find_agent(name) is None:
                return name
            n += 1

    # -- Spawning --

    def spawn(
        self,
        profile: Profile,
        *,
        spawn: EntityId | None = None,
        source: EntityId | None = AUTO,
        target: EntityId | None = AUTO,
        role: str | None = None,
        name: str | None = None,
        accept_little: bool = False,
        zone: str | None = None,
        slot: str | None = None,
    ) -> EntityId | None:
        """Create an agent for *profile* and seed its memory.

        Returns the new agent id, or None when no spawner is available or the
        body cannot be afforded. With *accept_little* an unaffordable body is
        scaled down to the budget, never below one part of each type.
        """
        colony = self._colony
        world = colony.world
        tick = colony.tick_number
        role = role or profile.role

        spawner = self._resolve_spawner(spawn, source, target, zone)
        if spawner is None:
            colony.events.emit(tick, "spawn_failed", role=role, reason="no_spawner")
            return None
        if self.is_busy(spawner):
            colony.events.emit(tick, "spawn_failed", role=role, spawner=spawner, reason="busy")
            return None
        if name is not None and world.alive(name):
            colony.events.emit(tick, "spawn_failed", role=role, spawner=spawner, reason="name_exists")
            return None

        origin = world.get(spawner, Pos)
        budget = self.budget(origin.zone)
        body: list[str] | None = list(profile.body)
        if body_cost(profile.body) > budget:
            body = affordable_composition(profile.body, budget) if accept_little else None
        if not body:
            colony.events.emit(
                tick, "spawn_unaffordable",
                role=role, spawner=spawner, cost=body_cost(profile.body), budget=budget,
            )
            return None

        if source == AUTO:
            source = colony.resolver.find_source(profile, spawner)
        elif source == ENERGY:
            source = colony.access.available_source(origin.zone)
        if target == AUTO:
            target = colony.resolver.find_target(profile, spawner)

        eid = world.spawn(name or self.choose_name(role))
        world.attach(eid, Agent(
            role=role, body=body,
            spawning=len(body) * colony.config.spawn_ticks_per_part,
        ))
        world.attach(eid, Pos(origin.zone, origin.x, origin.y))
        world.attach(eid, Store(
            amount=0, capacity=carry_capacity(body, colony.config.carry_per_part),
        ))
        world.attach(eid, Lifecycle(born_tick=tick, max_age=colony.config.agent_lifetime))
        self._pay(origin.zone, body_cost(body))
        world.get(spawner, Spawner).spawning = eid

        mem = colony.memory.agent(eid)
        mem.role = role
        mem.source = source
        mem.target = target
        mem.zone = zone or origin.zone
        mem.slot = slot
        mem.step = SPAWNING if slot is not None else None
        if target is not None and profile.target_duration is not None:
            mem.target_expires = tick + profile.target_duration
        if world.has(source, ResourceNode) and colony.access.claim(source, eid) is None:
            colony.events.emit(tick, "no_access_point", agent=eid, source=source)
        slot_memory = colony.memory.slot(mem.zone, slot)
        if slot_memory is not None:
            slot_memory.agent = eid

        colony.events.emit(
            tick, "spawned",
            agent=eid, role=role, body=list(body), spawner=spawner,
            source=source, target=target, slot=slot,
        )
        return eid

    def plan(self) -> list[EntityId]:
        """Fill vacant zone slots, then spawn one agent for each absent auto-spawn role.

        Uses the census taken at the start of the tick. Returns the agents
        created.
        """
        colony = self._colony
        created: list[EntityId] = []
        spawned_roles: set[str] = set()
        for zone_name, zone in colony.memory.zones.items():
            for slot_name, slot in zone.slots.items():
                if colony.world.has(slot.agent, Agent):
                    continue
                profile = colony.profiles.find(slot.role)
                spawner = self._slot_spawner(zone_name)
                if profile is None or spawner is None:
                    continue
                eid = self.spawn(
                    profile, spawn=spawner, source=slot.source, target=slot.target,
                    zone=zone_name, slot=slot_name,
                )
                if eid is not None:
                    created.append(eid)
                    spawned_roles.add(profile.role)

        for profile in colony.profiles:
            if not profile.auto_spawn or profile.role in spawned_roles:
                continue
            if colony.census.role_count(profile.role):
                continue
            spawner = self.idle_spawner()
            if spawner is None:
                break
            eid = self.spawn(profile, spawn=spawner)
            if eid is not None:
                created.append(eid)
                spawned_roles.add(profile.role)
        return created

    def _slot_spawner(self, zone: str) -> EntityId | None:
        memory = self._colony.memory.zones.get(zone)
        default = memory.spawn if memory is not None else None
        if self._colony.world.has(default, Spawner):
            return None if self.is_busy(default) else default
        return self.idle_spawner(zone)
