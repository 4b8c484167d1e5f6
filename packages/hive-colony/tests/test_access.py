"""Tests for access points around extraction nodes."""
from __future__ import annotations

from hive_spatial import WALL, Pos, TerrainMap
from hive_store import Store

from hive_colony import (
    CARRY, MOVE, WORK, Agent, Colony, Profile, ProfileRegistry, add_node, carry_capacity,
)


def _colony() -> Colony:
    return Colony(seed=1, profiles=ProfileRegistry([Profile()]))


def _agent(colony: Colony, eid: str, x: int = 0, y: int = 0) -> str:
    body = [WORK, CARRY, MOVE]
    colony.world.spawn(eid)
    colony.world.attach(eid, Agent(role="worker", body=body))
    colony.world.attach(eid, Pos("W1", x, y))
    colony.world.attach(eid, Store(capacity=carry_capacity(body)))
    return eid


def _walled_node(colony: Colony) -> str:
    """A node at (10, 10) with a single open neighbour at (11, 11)."""
    terrain = TerrainMap()
    terrain.fill_rect((9, 9), (11, 11), WALL)
    terrain.set(10, 10, "plain")
    terrain.set(11, 11, "swamp")
    colony.add_terrain("W1", terrain)
    return add_node(colony.world, "W1", 10, 10, eid="node")


class TestSurvey:
    def test_open_ground_has_eight_points(self) -> None:
        colony = _colony()
        node = add_node(colony.world, "W1", 10, 10)
        assert colony.access.survey() is True
        assert colony.access.free_count(node) == 8
        assert colony.access.survey() is False

    def test_walls_and_map_edges_are_excluded(self) -> None:
        colony = _colony()
        node = _walled_node(colony)
        corner = add_node(colony.world, "W1", 0, 0)
        colony.access.survey()
        points = colony.memory.sources[node].access_points
        assert [(p.x, p.y, p.terrain) for p in points] == [(11, 11, "swamp")]
        assert colony.access.free_count(corner) == 3

    def test_forced_survey_rebinds_live_agents(self) -> None:
        colony = _colony()
        node = add_node(colony.world, "W1", 10, 10)
        eid = _agent(colony, "a")
        colony.memory.agent(eid).source = node
        colony.access.survey()
        colony.access.survey(force=True)
        assert colony.access.held(eid)[0] == node
        assert colony.access.free_count(node) == 7

    def test_nodes_added_later_are_surveyed_on_demand(self) -> None:
        colony = _colony()
        add_node(colony.world, "W1", 10, 10)
        colony.access.survey()
        late = add_node(colony.world, "W1", 30, 30)
        assert colony.access.free_count(late) == 8


class TestClaims:
    def test_no_double_occupancy(self) -> None:
        colony = _colony()
        node = _walled_node(colony)
        first = _agent(colony, "first")
        second = _agent(colony, "second")
        assert colony.access.claim(node, first) is not None
        assert colony.access.claim(node, second) is None
        assert colony.access.holder(node, 11, 11) == first
        assert colony.access.can_bind(node, first)
        assert not colony.access.can_bind(node, second)

    def test_claim_is_idempotent(self) -> None:
        colony = _colony()
        node = add_node(colony.world, "W1", 10, 10)
        eid = _agent(colony, "a")
        point = colony.access.claim(node, eid)
        assert colony.access.claim(node, eid) is point
        assert colony.access.free_count(node) == 7

    def test_claim_elsewhere_moves_the_agent(self) -> None:
        colony = _colony()
        a = add_node(colony.world, "W1", 10, 10)
        b = add_node(colony.world, "W1", 20, 20)
        eid = _agent(colony, "a")
        colony.access.claim(a, eid)
        colony.access.claim(b, eid)
        assert colony.access.free_count(a) == 8
        assert colony.access.held(eid)[0] == b

    def test_failed_claim_keeps_current_point(self) -> None:
        colony = _colony()
        node = _walled_node(colony)
        other = add_node(colony.world, "W1", 30, 30)
        holder = _agent(colony, "holder")
        eid = _agent(colony, "a")
        colony.access.claim(node, holder)
        colony.access.claim(other, eid)
        assert colony.access.claim(node, eid) is None
        assert colony.access.held(eid)[0] == other

    def test_release_and_dead_holders(self) -> None:
        colony = _colony()
        node = _walled_node(colony)
        eid = _agent(colony, "a")
        colony.access.claim(node, eid)
        colony.access.release(eid)
        assert colony.access.free_count(node) == 1

        colony.access.claim(node, eid)
        colony.world.despawn(eid)
        assert colony.access.free_count(node) == 1
        assert colony.access.holder(node, 11, 11) is None

    def test_available_source(self) -> None:
        colony = _colony()
        node = _walled_node(colony)
        other = add_node(colony.world, "W2", 5, 5)
        colony.access.survey()
        assert colony.access.available_source() == node
        assert colony.access.available_source("W2") == other
        assert colony.access.available_count() == 9

        colony.access.claim(node, _agent(colony, "a"))
        assert colony.access.available_source() == other
        assert colony.access.available_source("W1") is None
        assert colony.access.available_count() == 8
