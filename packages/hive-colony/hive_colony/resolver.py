"""Assignment resolver: binds agents to sources and targets.

Bindings are lazy. An agent keeps its persisted source (or target) while
that entity is alive and the job on it is not done, and only then asks its
profile for new candidates. This keeps agents from thrashing between
equivalent choices from one tick to the next.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_colony.components import Agent, ResourceNode

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony
    from hive_colony.profiles import Profile


class AssignmentResolver:
    def __init__(self, colony: Colony) -> None:
        self._colony = colony

    def _is_agent(self, context: EntityId | None) -> bool:
        return self._colony.world.has(context, Agent)

    def _has_point(self, source: EntityId | None, eid: EntityId) -> bool:
        if not self._colony.world.has(source, ResourceNode):
            return True
        return self._colony.access.claim(source, eid) is not None

    def find_source(self, profile: Profile, context: EntityId) -> EntityId | None:
        """First candidate source that can be bound, persisted when *context* is an agent.

        Extraction nodes are bound only together with one of their access
        points. With no candidate the persisted source and any access point
        are released.
        """
        colony = self._colony
        world = colony.world
        agent = self._is_agent(context)
        for candidate in profile.sources(colony, context):
            if world.has(candidate, ResourceNode):
                if agent:
                    if colony.access.claim(candidate, context) is None:
                        continue
                elif colony.access.free_count(candidate) == 0:
                    continue
            elif agent:
                colony.access.release(context)
            if agent:
                colony.memory.agent(context).source = candidate
            return candidate
        if agent:
            colony.memory.agent(context).source = None
            colony.access.release(context)
        return None

    def find_target(self, profile: Profile, context: EntityId) -> EntityId | None:
        colony = self._colony
        targets = profile.targets(colony, context)
        target = targets[0] if targets else None
        if self._is_agent(context):
            mem = colony.memory.agent(context)
            mem.target = target
            if target is not None and profile.target_duration is not None:
                mem.target_expires = colony.tick_number + profile.target_duration
            else:
                mem.target_expires = None
        return target

    def single_source(self, profile: Profile, eid: EntityId) -> bool:
        mem = self._colony.memory.find_agent(eid)
        if mem is not None and mem.single_source is not None:
            return mem.single_source
        return profile.single_source

    def single_target(self, profile: Profile, eid: EntityId) -> bool:
        mem = self._colony.memory.find_agent(eid)
        if mem is not None and mem.single_target is not None:
            return mem.single_target
        return profile.single_target

    def source(self, profile: Profile, eid: EntityId) -> EntityId | None:
        """The agent's source for this tick, re-resolved only when lost or done.

        A node binding is kept only while the agent holds one of its access
        points.
        """
        colony = self._colony
        mem = colony.memory.agent(eid)
        alive = colony.world.alive(mem.source)
        if alive and not profile.source_job_done(colony, eid) and self._has_point(mem.source, eid):
            return mem.source
        if self.single_source(profile, eid):
            if not alive:
                mem.source = None
                colony.access.release(eid)
            return None
        return self.find_source(profile, eid)

    def target(self, profile: Profile, eid: EntityId) -> EntityId | None:
        """The agent's target for this tick.

        A target past its duration is re-resolved, except for single-target
        agents, which keep a live target until its job is done.
        """
        colony = self._colony
        mem = colony.memory.agent(eid)
        alive = colony.world.alive(mem.target)
        single = self.single_target(profile, eid)
        expired = mem.target_expires is not None and colony.tick_number > mem.target_expires
        if alive and (single or not expired) and not profile.target_job_done(colony, eid):
            return mem.target
        if single:
            if not alive:
                mem.target = None
            return None
        return self.find_target(profile, eid)

    def source_count(self, source: EntityId | None, context: EntityId | None = None) -> int:
        return self._colony.census.source_count(source, context)

    def target_count(self, target: EntityId | None, context: EntityId | None = None) -> int:
        return self._colony.census.target_count(target, context)
