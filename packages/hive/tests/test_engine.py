"""Tests for the tick loop, system ordering, hooks and snapshots."""

import json
from dataclasses import dataclass

import pytest

from hive.engine import Engine
from hive.types import SnapshotError


@dataclass
class Counter:
    value: int


def test_tick_advances_tick_number():
    engine = Engine(seed=1)
    engine.tick()
    engine.tick()
    assert engine.tick_number == 2


def test_systems_run_in_registration_order():
    engine = Engine(seed=1)
    calls = []
    engine.add_system(lambda w, ctx: calls.append(("a", ctx.tick_number)))
    engine.add_system(lambda w, ctx: calls.append(("b", ctx.tick_number)))
    engine.tick()
    assert calls == [("a", 1), ("b", 1)]


def test_request_stop_skips_remaining_systems():
    engine = Engine(seed=1)
    calls = []

    def stopper(world, ctx):
        calls.append("stop")
        ctx.request_stop()

    engine.add_system(stopper)
    engine.add_system(lambda w, ctx: calls.append("late"))
    engine.run(5)
    assert calls == ["stop"]
    assert engine.tick_number == 1


def test_start_and_stop_hooks_fire_once():
    engine = Engine(seed=1)
    events = []
    engine.on_start(lambda w, ctx: events.append("start"))
    engine.on_stop(lambda w, ctx: events.append("stop"))
    engine.run(3)
    assert events == ["start", "stop"]


def test_seeded_engines_share_random_stream():
    a = Engine(seed=42)
    b = Engine(seed=42)
    assert [a.random.random() for _ in range(3)] == [b.random.random() for _ in range(3)]


def test_snapshot_is_json_compatible_and_restores():
    engine = Engine(seed=42)
    eid = engine.world.spawn("hub")
    engine.world.attach(eid, Counter(3))
    engine.run(4)
    snap = json.loads(json.dumps(engine.snapshot()))

    other = Engine(seed=7)
    other.world.register_component(Counter)
    other.restore(snap)
    assert other.tick_number == 4
    assert other.seed == 42
    assert other.world.get("hub", Counter).value == 3
    assert other.random.random() == engine.random.random()


def test_restore_rejects_unknown_version():
    engine = Engine(seed=1)
    snap = engine.snapshot()
    snap["version"] = 99
    with pytest.raises(SnapshotError):
        Engine(seed=1).restore(snap)
