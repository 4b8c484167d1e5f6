"""Access points: the exclusive tiles around each extraction node."""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from hive_spatial import PLAIN, SWAMP, Pos, TerrainMap, area_lookup

from hive_colony.components import Agent, ResourceNode
from hive_colony.memory import AccessPoint, SourceMemory

if TYPE_CHECKING:
    from hive import EntityId, World

    from hive_colony.memory import MemoryStore

_OPEN_GROUND = TerrainMap()


class AccessPoints:
    """Binds agents to access points of extraction nodes.

    An access point holds at most one live agent and an agent holds at most
    one access point. Points held by agents that are no longer alive count as
    free.
    """

    def __init__(
        self, world: World, memory: MemoryStore, terrains: Mapping[str, TerrainMap],
    ) -> None:
        self._world = world
        self._memory = memory
        self._terrains = terrains

    def _build(self, node: EntityId) -> SourceMemory | None:
        pos = self._world.find(node, Pos)
        if pos is None or not self._world.has(node, ResourceNode):
            return None
        terrain = self._terrains.get(pos.zone, _OPEN_GROUND)
        points = [
            AccessPoint(cell.x, cell.y, cell.kind)
            for cell in area_lookup(terrain, pos.x, pos.y, 1)
            if (cell.x, cell.y) != (pos.x, pos.y) and cell.kind in (PLAIN, SWAMP)
        ]
        return SourceMemory(zone=pos.zone, access_points=points)

    def _source(self, node: EntityId | None) -> SourceMemory | None:
        if node is None:
            return None
        source = self._memory.sources.get(node)
        if source is None:
            source = self._build(node)
            if source is not None:
                self._memory.sources[node] = source
        return source

    def _free(self, point: AccessPoint) -> bool:
        return point.agent is None or not self._world.has(point.agent, Agent)

    def survey(self, force: bool = False) -> bool:
        """Record the access points of every extraction node.

        Does nothing once surveyed unless *force* is set. A forced survey
        rebuilds every record and re-binds live agents to points of the node
        their memory names. Returns True when a survey ran.
        """
        if self._memory.sources and not force:
            return False
        self._memory.sources.clear()
        for node, _ in self._world.query(ResourceNode, Pos):
            self._source(node)
        for eid, _ in self._world.query(Agent):
            mem = self._memory.find_agent(eid)
            if mem is not None and mem.source in self._memory.sources:
                self.claim(mem.source, eid)
        return True

    def held(self, eid: EntityId) -> tuple[EntityId, AccessPoint] | None:
        for node, source in self._memory.sources.items():
            for point in source.access_points:
                if point.agent == eid:
                    return node, point
        return None

    def claim(self, node: EntityId, eid: EntityId) -> AccessPoint | None:
        """Bind *eid* to a free point of *node*, keeping a point it already holds there.

        Claiming a point on another node releases the previous one. Returns
        None, leaving any current point untouched, when *node* has no free
        point.
        """
        source = self._source(node)
        if source is None:
            return None
        for point in source.access_points:
            if point.agent == eid:
                return point
        for point in source.access_points:
            if self._free(point):
                self.release(eid)
                point.agent = eid
                return point
        return None

    def release(self, eid: EntityId) -> None:
        for source in self._memory.sources.values():
            for point in source.access_points:
                if point.agent == eid:
                    point.agent = None

    def holder(self, node: EntityId, x: int, y: int) -> EntityId | None:
        source = self._memory.sources.get(node)
        if source is None:
            return None
        for point in source.access_points:
            if (point.x, point.y) == (x, y) and not self._free(point):
                return point.agent
        return None

    def free_count(self, node: EntityId | None) -> int:
        source = self._source(node)
        if source is None:
            return 0
        return sum(1 for point in source.access_points if self._free(point))

    def can_bind(self, node: EntityId | None, eid: EntityId | None) -> bool:
        """True when *eid* holds a point of *node* or one is free."""
        source = self._source(node)
        if source is None:
            return False
        return any(p.agent == eid or self._free(p) for p in source.access_points)

    def available_source(self, zone: str | None = None) -> EntityId | None:
        """First live node with a free access point, optionally within *zone*."""
        for node, source in self._memory.sources.items():
            if zone is not None and source.zone != zone:
                continue
            if not self._world.has(node, ResourceNode):
                continue
            if any(self._free(point) for point in source.access_points):
                return node
        return None

    def available_count(self) -> int:
        return sum(
            self.free_count(node)
            for node in self._memory.sources
            if self._world.has(node, ResourceNode)
        )
