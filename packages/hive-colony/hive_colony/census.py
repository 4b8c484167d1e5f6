"""Per-tick population census: role counts and source/target bindings."""
from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from hive_colony.components import Agent

if TYPE_CHECKING:
    from hive import EntityId, World

    from hive_colony.memory import MemoryStore


class Census:
    """One consistent view of the live population, taken once per tick.

    Counts read from the census ignore rebinding done later in the same
    tick, so every agent resolves contention against the same state.
    """

    def __init__(self) -> None:
        self._roster: frozenset[EntityId] = frozenset()
        self._roles: Counter[str] = Counter()
        self._sources: dict[EntityId, list[EntityId]] = {}
        self._targets: dict[EntityId, list[EntityId]] = {}
        self.tick: int = -1

    def take(self, world: World, memory: MemoryStore, tick: int) -> None:
        roster: list[EntityId] = []
        roles: Counter[str] = Counter()
        sources: dict[EntityId, list[EntityId]] = {}
        targets: dict[EntityId, list[EntityId]] = {}
        for eid, (agent,) in world.query(Agent):
            roster.append(eid)
            roles[agent.role] += 1
            mem = memory.find_agent(eid)
            if mem is None:
                continue
            if mem.source is not None:
                sources.setdefault(mem.source, []).append(eid)
            if mem.target is not None:
                targets.setdefault(mem.target, []).append(eid)
        self._roster = frozenset(roster)
        self._roles = roles
        self._sources = sources
        self._targets = targets
        self.tick = tick

    @property
    def roster(self) -> frozenset[EntityId]:
        return self._roster

    def role_count(self, role: str) -> int:
        return self._roles[role]

    def counts(self) -> dict[str, int]:
        return dict(self._roles)

    def source_count(self, source: EntityId | None, context: EntityId | None = None) -> int:
        """Live agents bound to *source*, not counting *context* itself."""
        return sum(1 for eid in self._sources.get(source, ()) if eid != context)

    def target_count(self, target: EntityId | None, context: EntityId | None = None) -> int:
        return sum(1 for eid in self._targets.get(target, ()) if eid != context)
