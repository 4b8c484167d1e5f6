"""Tests for entity CRUD, component attach/detach, queries and despawn hooks."""

from dataclasses import dataclass

import pytest

from hive.filters import Not
from hive.types import DeadEntityError, SnapshotError
from hive.world import World


@dataclass
class Position:
    x: int
    y: int


@dataclass
class Health:
    hp: int


# --- Entity creation ---

def test_generated_ids_are_unique_strings():
    world = World()
    ids = [world.spawn() for _ in range(50)]
    assert len(set(ids)) == 50
    assert all(isinstance(eid, str) for eid in ids)


def test_named_spawn_uses_given_id():
    world = World()
    eid = world.spawn("Ada")
    assert eid == "Ada"
    assert world.alive("Ada")


def test_named_spawn_rejects_live_duplicate():
    world = World()
    world.spawn("Ada")
    with pytest.raises(ValueError):
        world.spawn("Ada")


def test_generated_id_skips_named_collision():
    world = World()
    world.spawn("#0")
    eid = world.spawn()
    assert eid != "#0"


# --- Component access ---

def test_get_dead_entity_raises():
    world = World()
    eid = world.spawn()
    world.despawn(eid)
    with pytest.raises(DeadEntityError):
        world.get(eid, Position)


def test_get_missing_component_raises_key_error():
    world = World()
    eid = world.spawn()
    with pytest.raises(KeyError):
        world.get(eid, Position)


def test_find_is_total():
    world = World()
    eid = world.spawn()
    world.attach(eid, Position(1, 2))
    assert world.find(eid, Position) == Position(1, 2)
    assert world.find(eid, Health) is None
    assert world.find("nobody", Position) is None
    assert world.find(None, Position) is None


def test_attach_to_dead_entity_raises():
    world = World()
    with pytest.raises(DeadEntityError):
        world.attach("ghost", Health(3))


def test_detach_removes_component():
    world = World()
    eid = world.spawn()
    world.attach(eid, Health(3))
    world.detach(eid, Health)
    assert not world.has(eid, Health)


# --- Queries ---

def test_query_requires_all_types():
    world = World()
    a = world.spawn()
    b = world.spawn()
    world.attach(a, Position(0, 0))
    world.attach(a, Health(5))
    world.attach(b, Position(1, 1))
    assert [eid for eid, _ in world.query(Position, Health)] == [a]


def test_query_not_filter_excludes():
    world = World()
    a = world.spawn()
    b = world.spawn()
    world.attach(a, Position(0, 0))
    world.attach(b, Position(1, 1))
    world.attach(b, Health(1))
    assert [eid for eid, _ in world.query(Position, Not(Health))] == [a]


def test_query_follows_creation_order():
    world = World()
    for name in ("c", "a", "b"):
        world.spawn(name)
        world.attach(name, Health(1))
    assert [eid for eid, _ in world.query(Health)] == ["c", "a", "b"]


def test_query_without_required_types_yields_nothing():
    world = World()
    world.spawn()
    assert list(world.query(Not(Health))) == []


# --- Despawn hooks ---

def test_despawn_hook_sees_components():
    world = World()
    seen = []
    world.on_despawn(lambda w, eid: seen.append(w.find(eid, Health)))
    eid = world.spawn()
    world.attach(eid, Health(7))
    world.despawn(eid)
    assert seen == [Health(7)]
    assert not world.alive(eid)


def test_despawn_unknown_entity_is_noop():
    world = World()
    world.despawn("nobody")
    assert world.entities() == frozenset()


# --- Snapshot ---

def test_snapshot_restore_round_trip():
    world = World()
    eid = world.spawn("Ada")
    world.attach(eid, Position(3, 4))
    data = world.snapshot()

    other = World()
    other.register_component(Position)
    other.restore(data)
    assert other.get("Ada", Position) == Position(3, 4)


def test_restore_unregistered_type_raises():
    world = World()
    eid = world.spawn()
    world.attach(eid, Position(3, 4))
    with pytest.raises(SnapshotError):
        World().restore(world.snapshot())


def test_snapshot_rejects_non_dataclass():
    world = World()
    eid = world.spawn()
    world.attach(eid, object())
    with pytest.raises(TypeError):
        world.snapshot()
