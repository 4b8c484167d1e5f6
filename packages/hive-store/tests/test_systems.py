"""Tests for regeneration and decay systems."""
from __future__ import annotations

from hive import Engine
from hive_store import Decay, Regen, Store, make_decay_system, make_regen_system


class TestRegenSystem:
    def test_untouched_store_never_counts_down(self) -> None:
        engine = Engine(seed=1)
        engine.add_system(make_regen_system())
        eid = engine.world.spawn()
        engine.world.attach(eid, Store(amount=100, capacity=100))
        engine.world.attach(eid, Regen(interval=3))
        engine.run(5)
        assert engine.world.get(eid, Regen).countdown == 0

    def test_refills_after_interval(self) -> None:
        engine = Engine(seed=1)
        refills = []
        engine.add_system(make_regen_system(lambda w, ctx, eid: refills.append(ctx.tick_number)))
        eid = engine.world.spawn()
        store = Store(amount=10, capacity=100)
        engine.world.attach(eid, store)
        engine.world.attach(eid, Regen(interval=3))

        engine.run(3)
        assert store.amount == 10
        engine.tick()
        assert store.amount == 100
        assert refills == [4]


class TestDecaySystem:
    def test_decay_rounds_up(self) -> None:
        engine = Engine(seed=1)
        engine.add_system(make_decay_system())
        eid = engine.world.spawn()
        store = Store(amount=1500)
        engine.world.attach(eid, store)
        engine.world.attach(eid, Decay())
        engine.tick()
        assert store.amount == 1498

    def test_empty_pile_despawns_after_callback(self) -> None:
        engine = Engine(seed=1)
        emptied = []
        engine.add_system(make_decay_system(lambda w, ctx, eid: emptied.append(w.alive(eid))))
        eid = engine.world.spawn()
        engine.world.attach(eid, Store(amount=1))
        engine.world.attach(eid, Decay())
        engine.tick()
        assert emptied == [True]
        assert not engine.world.alive(eid)
