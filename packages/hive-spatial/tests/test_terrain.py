"""Tests for TerrainMap and area lookups."""
from __future__ import annotations

import pytest

from hive_spatial import PLAIN, SWAMP, WALL, TerrainCell, TerrainMap, area_lookup


class TestTerrainMap:
    def test_default_and_set(self) -> None:
        terrain = TerrainMap(10, 10)
        terrain.set(2, 3, SWAMP)
        assert terrain.at(2, 3) == SWAMP
        assert terrain.at(0, 0) == PLAIN

    def test_out_of_bounds_reads_as_wall(self) -> None:
        terrain = TerrainMap(10, 10)
        assert terrain.at(-1, 0) == WALL
        assert not terrain.passable(10, 0)

    def test_set_rejects_unknown_kind_and_bounds(self) -> None:
        terrain = TerrainMap(10, 10)
        with pytest.raises(ValueError):
            terrain.set(1, 1, "lava")
        with pytest.raises(ValueError):
            terrain.set(11, 1, WALL)

    def test_fill_rect_inclusive(self) -> None:
        terrain = TerrainMap(10, 10)
        terrain.fill_rect((3, 3), (1, 1), WALL)
        assert all(not terrain.passable(x, y) for x in range(1, 4) for y in range(1, 4))
        assert terrain.passable(4, 4)

    def test_snapshot_round_trip(self) -> None:
        terrain = TerrainMap(8, 6)
        terrain.set(1, 2, WALL)
        copy = TerrainMap.from_snapshot(terrain.snapshot())
        assert (copy.width, copy.height) == (8, 6)
        assert copy.at(1, 2) == WALL


class TestAreaLookup:
    def test_square_around_tile(self) -> None:
        terrain = TerrainMap(10, 10)
        terrain.set(4, 4, WALL)
        cells = area_lookup(terrain, 5, 5, 1)
        assert len(cells) == 9
        assert TerrainCell(4, 4, WALL) in cells

    def test_clipped_at_edges(self) -> None:
        terrain = TerrainMap(10, 10)
        assert len(area_lookup(terrain, 0, 0, 1)) == 4
