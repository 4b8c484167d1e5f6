"""Movement collaborator: move outcomes, straight paths and a grid mover.

This is deliberately not a pathfinder. Paths are straight tile lines
precomputed once and followed step by step; a tile that is a wall or is
occupied makes the move report ``BLOCKED`` and the caller retries next tick.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Mapping, Protocol

from hive_spatial.queries import range_to
from hive_spatial.types import Coord, Pos

if TYPE_CHECKING:
    from hive import EntityId, World
    from hive_spatial.terrain import TerrainMap

# A path node is ``[x, y]``; ``[x, y, 1]`` marks a waypoint.
PathNode = list[int]
Occupied = Callable[["World", "EntityId", str, int, int], bool]


class MoveResult(str, Enum):
    ARRIVED = "arrived"
    WAYPOINT = "waypoint"
    MOVING = "moving"
    BLOCKED = "blocked"
    ERROR = "error"


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def straight_path(start: Coord, goal: Coord) -> list[PathNode]:
    """Tiles from *start* to *goal* inclusive, moving diagonally first."""
    x, y = start
    path: list[PathNode] = [[x, y]]
    while (x, y) != tuple(goal):
        x += _sign(goal[0] - x)
        y += _sign(goal[1] - y)
        path.append([x, y])
    return path


def is_waypoint(node: PathNode) -> bool:
    return len(node) > 2 and bool(node[2])


class Mover(Protocol):
    def move_towards(
        self, world: World, eid: EntityId, goal: Pos, reach: int = 1, steps: int = 1,
    ) -> MoveResult: ...

    def follow(
        self,
        world: World,
        eid: EntityId,
        path: list[PathNode],
        index: int | None,
        reverse: bool = False,
        steps: int = 1,
    ) -> tuple[MoveResult, int]: ...


class GridMover:
    """Reference mover over per-zone terrain maps.

    ``occupied(world, eid, zone, x, y)`` reports whether another body blocks
    the tile for *eid*. Zones without a terrain map are open ground.
    """

    def __init__(
        self,
        terrains: Mapping[str, TerrainMap] | None = None,
        occupied: Occupied | None = None,
    ) -> None:
        self._terrains = terrains if terrains is not None else {}
        self._occupied = occupied

    def _free(self, world: World, eid: EntityId, zone: str, x: int, y: int) -> bool:
        terrain = self._terrains.get(zone)
        if terrain is not None and not terrain.passable(x, y):
            return False
        if self._occupied is not None and self._occupied(world, eid, zone, x, y):
            return False
        return True

    def _step_to(self, world: World, eid: EntityId, pos: Pos, x: int, y: int) -> bool:
        """Take one tile towards ``(x, y)``, sliding along an axis when blocked."""
        dx, dy = _sign(x - pos.x), _sign(y - pos.y)
        options = [(dx, dy)]
        if dx and dy:
            options += [(dx, 0), (0, dy)]
        for ox, oy in options:
            nx, ny = pos.x + ox, pos.y + oy
            if self._free(world, eid, pos.zone, nx, ny):
                pos.x, pos.y = nx, ny
                return True
        return False

    def move_towards(
        self, world: World, eid: EntityId, goal: Pos, reach: int = 1, steps: int = 1,
    ) -> MoveResult:
        pos = world.find(eid, Pos)
        if pos is None or pos.zone != goal.zone:
            return MoveResult.ERROR
        if range_to(pos, goal) <= reach:
            return MoveResult.ARRIVED
        for _ in range(max(1, steps)):
            if not self._step_to(world, eid, pos, goal.x, goal.y):
                return MoveResult.BLOCKED
            if range_to(pos, goal) <= reach:
                return MoveResult.ARRIVED
        return MoveResult.MOVING

    def follow(
        self,
        world: World,
        eid: EntityId,
        path: list[PathNode],
        index: int | None,
        reverse: bool = False,
        steps: int = 1,
    ) -> tuple[MoveResult, int]:
        """Walk *path* forwards (or backwards) from *index*.

        Returns the move result and the new path index. Forward walks stop on
        mid-path waypoints with ``WAYPOINT``. An agent found off its path
        first walks back to the node at *index*.
        """
        pos = world.find(eid, Pos)
        if pos is None:
            return MoveResult.ERROR, index or 0
        if not path:
            return MoveResult.ARRIVED, 0
        last = len(path) - 1
        i = min(max(index or 0, 0), last)
        end = 0 if reverse else last

        for _ in range(max(1, steps)):
            node = path[i]
            if (pos.x, pos.y) != (node[0], node[1]):
                if not self._step_to(world, eid, pos, node[0], node[1]):
                    return MoveResult.BLOCKED, i
                continue
            if i == end:
                return MoveResult.ARRIVED, i
            nxt = i - 1 if reverse else i + 1
            x, y = path[nxt][0], path[nxt][1]
            if not self._free(world, eid, pos.zone, x, y):
                return MoveResult.BLOCKED, i
            pos.x, pos.y = x, y
            i = nxt
            if i == end:
                return MoveResult.ARRIVED, i
            if not reverse and is_waypoint(path[i]):
                return MoveResult.WAYPOINT, i
        return MoveResult.MOVING, i
