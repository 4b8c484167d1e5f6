"""hive-spatial - Positions, terrain, world queries and movement for the hive engine."""
from __future__ import annotations

from hive_spatial.movement import GridMover, MoveResult, Mover, PathNode, is_waypoint, straight_path
from hive_spatial.queries import area_lookup, by_range, find_all, in_range, nearest, range_to
from hive_spatial.terrain import PLAIN, SWAMP, WALL, TerrainMap
from hive_spatial.types import Coord, Pos, TerrainCell

__all__ = [
    "Coord",
    "Pos",
    "TerrainCell",
    "TerrainMap",
    "PLAIN",
    "SWAMP",
    "WALL",
    "range_to",
    "in_range",
    "find_all",
    "by_range",
    "nearest",
    "area_lookup",
    "MoveResult",
    "Mover",
    "GridMover",
    "PathNode",
    "is_waypoint",
    "straight_path",
]
