"""TerrainMap - sparse per-zone terrain storage."""
from __future__ import annotations

from typing import Any

from hive_spatial.types import Coord

PLAIN = "plain"
SWAMP = "swamp"
WALL = "wall"

TERRAIN_KINDS = (PLAIN, SWAMP, WALL)


class TerrainMap:
    """Maps tile coordinates to terrain kinds.

    Sparse storage: only non-default tiles are stored. Tiles outside the map
    bounds read as walls.
    """

    def __init__(self, width: int = 50, height: int = 50, default: str = PLAIN) -> None:
        if default not in TERRAIN_KINDS:
            raise ValueError(f"Unknown terrain kind: {default!r}")
        self._width = width
        self._height = height
        self._default = default
        self._tiles: dict[Coord, str] = {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def set(self, x: int, y: int, kind: str) -> None:
        if kind not in TERRAIN_KINDS:
            raise ValueError(f"Unknown terrain kind: {kind!r}")
        if not self.in_bounds(x, y):
            raise ValueError(f"({x}, {y}) out of bounds for {self._width}x{self._height} map")
        if kind == self._default:
            self._tiles.pop((x, y), None)
        else:
            self._tiles[(x, y)] = kind

    def fill_rect(self, corner1: Coord, corner2: Coord, kind: str) -> None:
        """Fill a rectangle (inclusive) with one terrain kind."""
        x1, y1 = min(corner1[0], corner2[0]), min(corner1[1], corner2[1])
        x2, y2 = max(corner1[0], corner2[0]), max(corner1[1], corner2[1])
        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                self.set(x, y, kind)

    def at(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            return WALL
        return self._tiles.get((x, y), self._default)

    def passable(self, x: int, y: int) -> bool:
        return self.at(x, y) != WALL

    def snapshot(self) -> dict[str, Any]:
        return {
            "width": self._width,
            "height": self._height,
            "default": self._default,
            "tiles": {f"{x},{y}": kind for (x, y), kind in self._tiles.items()},
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> TerrainMap:
        terrain = cls(data["width"], data["height"], data["default"])
        for key, kind in data.get("tiles", {}).items():
            x, y = (int(c) for c in key.split(","))
            terrain.set(x, y, kind)
        return terrain
