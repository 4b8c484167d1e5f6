"""Tests for the job controller phases and the basic work loop."""
from __future__ import annotations

from hive_spatial import Pos
from hive_store import Store

from hive_colony import (
    CARRY, EXTENSION, MOVE, WORK, Agent, Colony, Outcome, Phase, Profile, ProfileRegistry,
    Repairer, WorkResult, add_pile, add_structure, carry_capacity, source_work, target_work,
)
from hive_colony import basic


class Idle(Profile):
    role = "idle"
    target_work = False


def _colony() -> Colony:
    return Colony(seed=1, profiles=ProfileRegistry([Profile(), Repairer(), Idle()]))


def _agent(colony: Colony, eid: str = "a", role: str = "worker", amount: int = 0) -> str:
    body = [WORK, CARRY, MOVE]
    colony.world.spawn(eid)
    colony.world.attach(eid, Agent(role=role, body=body))
    colony.world.attach(eid, Pos("W1", 0, 0))
    colony.world.attach(eid, Store(amount=amount, capacity=carry_capacity(body)))
    colony.memory.agent(eid).role = role
    return eid


class TestSourceWork:
    def test_disabled_hands_off_without_touching_memory(self) -> None:
        colony = _colony()
        add_pile(colony.world, "W1", 1, 1, 10)
        eid = _agent(colony, role="repairer")
        result = source_work(colony, Repairer(), eid)
        assert result == WorkResult(Outcome.SOURCE_WORK_OFF, Phase.TARGET)
        mem = colony.memory.agent(eid)
        assert mem.source is None
        assert mem.target is None

    def test_full_bay_hands_off_when_a_target_resolves(self) -> None:
        colony = _colony()
        ext = add_structure(colony.world, EXTENSION, "W1", 3, 3)
        eid = _agent(colony, amount=50)
        assert source_work(colony, Profile(), eid) == WorkResult(Outcome.OK, Phase.TARGET)
        assert colony.memory.agent(eid).target == ext

    def test_full_bay_without_target_waits(self) -> None:
        colony = _colony()
        eid = _agent(colony, amount=50)
        assert source_work(colony, Profile(), eid) == WorkResult(Outcome.WAIT)

    def test_no_source_hands_off_only_with_cargo(self) -> None:
        colony = _colony()
        add_structure(colony.world, EXTENSION, "W1", 3, 3)
        empty = _agent(colony, "empty")
        loaded = _agent(colony, "loaded", amount=10)
        assert source_work(colony, Profile(), empty) == WorkResult(Outcome.NO_SOURCE)
        assert source_work(colony, Profile(), loaded) == WorkResult(Outcome.NO_SOURCE, Phase.TARGET)

    def test_job_outcome_passes_through(self) -> None:
        colony = _colony()
        far = add_pile(colony.world, "W1", 5, 5, 30)
        eid = _agent(colony)
        assert source_work(colony, Profile(), eid) == WorkResult(Outcome.NOT_IN_RANGE)
        assert colony.memory.agent(eid).source == far

        colony.world.get(eid, Pos).x = 4
        colony.world.get(eid, Pos).y = 4
        assert source_work(colony, Profile(), eid) == WorkResult(Outcome.OK)
        assert colony.world.get(eid, Store).amount == 30


class TestTargetWork:
    def test_disabled_hands_off(self) -> None:
        colony = _colony()
        eid = _agent(colony, role="idle", amount=20)
        assert target_work(colony, Idle(), eid) == WorkResult(Outcome.TARGET_WORK_OFF, Phase.SOURCE)

    def test_empty_bay_hands_off_when_a_source_resolves(self) -> None:
        colony = _colony()
        pile = add_pile(colony.world, "W1", 2, 2, 10)
        eid = _agent(colony)
        assert target_work(colony, Profile(), eid) == WorkResult(Outcome.OK, Phase.SOURCE)
        assert colony.memory.agent(eid).source == pile

    def test_empty_bay_without_source_waits(self) -> None:
        colony = _colony()
        eid = _agent(colony)
        assert target_work(colony, Profile(), eid) == WorkResult(Outcome.WAIT)

    def test_no_target(self) -> None:
        colony = _colony()
        add_pile(colony.world, "W1", 2, 2, 10)
        eid = _agent(colony, amount=10)
        assert target_work(colony, Profile(), eid) == WorkResult(Outcome.NO_TARGET, Phase.SOURCE)
        full = _agent(colony, "full", amount=50)
        assert target_work(colony, Profile(), full) == WorkResult(Outcome.NO_TARGET)

    def test_delivers_in_range(self) -> None:
        colony = _colony()
        ext = add_structure(colony.world, EXTENSION, "W1", 1, 0)
        eid = _agent(colony, amount=30)
        assert target_work(colony, Profile(), eid) == WorkResult(Outcome.OK)
        assert colony.world.get(ext, Store).amount == 30


class TestBasicLoop:
    def test_moves_towards_an_out_of_range_source(self) -> None:
        colony = _colony()
        add_pile(colony.world, "W1", 5, 5, 30)
        eid = _agent(colony)
        assert basic.work(colony, Profile(), eid) == Outcome.NOT_IN_RANGE
        pos = colony.world.get(eid, Pos)
        assert (pos.x, pos.y) == (1, 1)
        mem = colony.memory.agent(eid)
        assert mem.moved == colony.tick_number
        assert mem.step == "source"

    def test_phase_is_persisted_across_calls(self) -> None:
        colony = _colony()
        ext = add_structure(colony.world, EXTENSION, "W1", 1, 1)
        eid = _agent(colony, amount=50)
        mem = colony.memory.agent(eid)

        assert basic.work(colony, Profile(), eid) == Outcome.OK
        assert mem.step == "target"
        assert basic.work(colony, Profile(), eid) == Outcome.OK
        assert colony.world.get(ext, Store).amount == 50
        assert colony.world.get(eid, Store).amount == 0

        assert basic.work(colony, Profile(), eid) == Outcome.WAIT
        assert mem.step == "target"
        assert colony.world.get(eid, Agent).saying == "t:wait"

    def test_unknown_step_reads_as_source(self) -> None:
        colony = _colony()
        eid = _agent(colony)
        colony.memory.agent(eid).step = "go_to_start"
        assert basic.work(colony, Profile(), eid) == Outcome.NO_SOURCE
        assert colony.memory.agent(eid).step == "source"
        assert colony.world.get(eid, Agent).saying == "s:no_source"
