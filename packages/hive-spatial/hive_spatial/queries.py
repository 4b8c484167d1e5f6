"""World queries: range, nearest entity, zone listings and terrain lookups.

Every query is total: absent entities or entities without a position are
skipped, never raised on.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Iterable

from hive_spatial.types import Pos, TerrainCell

if TYPE_CHECKING:
    from hive import EntityId, World
    from hive_spatial.terrain import TerrainMap

Where = Callable[["World", "EntityId"], bool]


def range_to(a: Pos, b: Pos) -> float:
    """Chebyshev distance in tiles; infinite across zones."""
    if a.zone != b.zone:
        return math.inf
    return float(max(abs(a.x - b.x), abs(a.y - b.y)))


def in_range(world: World, a: EntityId | None, b: EntityId | None, r: int) -> bool:
    pa = world.find(a, Pos)
    pb = world.find(b, Pos)
    if pa is None or pb is None:
        return False
    return range_to(pa, pb) <= r


def find_all(
    world: World, zone: str, *ctypes: type, where: Where | None = None,
) -> list[EntityId]:
    """All entities in *zone* holding every component in *ctypes*."""
    result: list[EntityId] = []
    for eid, comps in world.query(Pos, *ctypes):
        if comps[0].zone != zone:
            continue
        if where is not None and not where(world, eid):
            continue
        result.append(eid)
    return result


def by_range(world: World, origin: Pos, eids: Iterable[EntityId]) -> list[EntityId]:
    """Sort entities by range from *origin*. The sort is stable."""
    def _key(eid: EntityId) -> float:
        pos = world.find(eid, Pos)
        return math.inf if pos is None else range_to(origin, pos)

    return sorted(eids, key=_key)


def nearest(
    world: World, origin: Pos, *ctypes: type, where: Where | None = None,
) -> EntityId | None:
    """Closest same-zone entity holding *ctypes* and passing *where*.

    Ties go to the entity created first.
    """
    candidates = find_all(world, origin.zone, *ctypes, where=where)
    if not candidates:
        return None
    return by_range(world, origin, candidates)[0]


def area_lookup(terrain: TerrainMap, x: int, y: int, radius: int) -> list[TerrainCell]:
    """Terrain cells of the square of *radius* around ``(x, y)``, clipped to the map."""
    cells: list[TerrainCell] = []
    for cx in range(max(0, x - radius), min(terrain.width, x + radius + 1)):
        for cy in range(max(0, y - radius), min(terrain.height, y + radius + 1)):
            cells.append(TerrainCell(cx, cy, terrain.at(cx, cy)))
    return cells
