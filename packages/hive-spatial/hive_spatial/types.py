"""Shared types for hive-spatial."""
from __future__ import annotations

from dataclasses import dataclass

Coord = tuple[int, int]


@dataclass
class Pos:
    """Tile position inside a named zone."""

    zone: str
    x: int
    y: int

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class TerrainCell:
    x: int
    y: int
    kind: str
