"""Tests for agent lifespans and cargo dropped on expiry."""
from __future__ import annotations

from hive import World
from hive_spatial import Pos
from hive_store import Store

from hive_colony import Agent, Colony, Lifecycle, Pile, Profile, ProfileRegistry, add_pile
from hive_colony.lifecycle import drop_cargo, ticks_to_live


def _carrier(world: World, eid: str, amount: int) -> str:
    world.spawn(eid)
    world.attach(eid, Agent(role="carrier"))
    world.attach(eid, Pos("W1", 4, 4))
    world.attach(eid, Store(amount=amount, capacity=50))
    return eid


class TestTicksToLive:
    def test_counts_down_to_zero(self) -> None:
        lc = Lifecycle(born_tick=10, max_age=5)
        assert ticks_to_live(lc, 10) == 5
        assert ticks_to_live(lc, 15) == 0
        assert ticks_to_live(lc, 40) == 0

    def test_immortal(self) -> None:
        assert ticks_to_live(Lifecycle(born_tick=0, max_age=-1), 1000) is None


class TestDropCargo:
    def test_merges_into_the_pile_underfoot(self) -> None:
        world = World()
        pile = add_pile(world, "W1", 4, 4, 7)
        eid = _carrier(world, "c", 30)
        assert drop_cargo(world, eid) == 30
        assert world.get(pile, Store).amount == 37
        assert world.get(eid, Store).amount == 0
        assert len(list(world.query(Pile))) == 1

    def test_empty_bay_leaves_no_pile(self) -> None:
        world = World()
        eid = _carrier(world, "c", 0)
        assert drop_cargo(world, eid) == 0
        assert list(world.query(Pile)) == []


class TestDeathSystem:
    def test_non_agents_expire_silently(self) -> None:
        colony = Colony(seed=1, profiles=ProfileRegistry([Profile()]))
        colony.world.spawn("marker")
        colony.world.attach("marker", Lifecycle(born_tick=0, max_age=1))
        colony.tick()
        assert not colony.world.alive("marker")
        assert colony.events.last("died") is None

    def test_immortal_agents_stay(self) -> None:
        colony = Colony(seed=1, profiles=ProfileRegistry([Profile()]))
        eid = _carrier(colony.world, "c", 0)
        colony.world.attach(eid, Lifecycle(born_tick=0, max_age=-1))
        colony.run(5)
        assert colony.world.alive(eid)
