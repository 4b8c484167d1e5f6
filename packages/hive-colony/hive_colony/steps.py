"""Scripted step machine for slot-bound agents.

A slot agent walks from its spawner to the slot's start tile, then cycles
between source work at the start and target work at the far end of the
slot's path. Movement steps that arrive run the following step in the same
tick; work steps never do.
"""
from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from hive_spatial import MoveResult, Pos, straight_path
from hive_steps import StepMachine

from hive_colony import jobs
from hive_colony.components import Agent, ResourceNode
from hive_colony.outcomes import Outcome, Phase

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony
    from hive_colony.profiles import Profile

SPAWNING = "spawning"
GO_TO_START = "go_to_start"
SOURCE_WORK = "source_work"
GO_TO_TARGET = "go_to_target"
TARGET_WORK = "target_work"
GO_TO_SOURCE = "go_to_source"

_MOVED = (MoveResult.MOVING, MoveResult.WAYPOINT, MoveResult.ARRIVED)


def _walk(
    colony: Colony, profile: Profile, eid: EntityId, reverse: bool = False,
) -> MoveResult:
    mem = colony.memory.agent(eid)
    before = colony.world.get(eid, Pos).coord
    result, mem.path_step = colony.mover.follow(
        colony.world, eid, mem.path or [], mem.path_step, reverse=reverse, steps=profile.speed,
    )
    if result in _MOVED and colony.world.get(eid, Pos).coord != before:
        mem.moved = colony.tick_number
    if result not in _MOVED:
        colony.world.get(eid, Agent).saying = f"m:{result.value}"
    return result


def spawning(colony: Colony, profile: Profile, eid: EntityId) -> str:
    agent = colony.world.get(eid, Agent)
    if agent.spawning > 0:
        return SPAWNING
    mem = colony.memory.agent(eid)
    slot = colony.memory.slot(mem.zone, mem.slot)
    if slot is None or slot.start is None:
        agent.saying = "no pos"
        return SPAWNING
    pos = colony.world.get(eid, Pos)
    start = (slot.start[0], slot.start[1])
    if pos.coord == start:
        return SOURCE_WORK
    mem.path = straight_path(pos.coord, start)
    mem.path_step = 0
    mem.source = slot.source
    mem.target = slot.target
    if colony.world.has(slot.source, ResourceNode):
        if colony.access.claim(slot.source, eid) is None:
            colony.world.get(eid, Agent).saying = "no point"
    else:
        colony.access.release(eid)
    return GO_TO_START


def go_to_start(colony: Colony, profile: Profile, eid: EntityId) -> str:
    if _walk(colony, profile, eid) is not MoveResult.ARRIVED:
        return GO_TO_START
    mem = colony.memory.agent(eid)
    slot = colony.memory.slot(mem.zone, mem.slot)
    mem.path = copy.deepcopy(slot.path) if slot is not None and slot.path else None
    mem.path_step = None
    return SOURCE_WORK


def source_work(colony: Colony, profile: Profile, eid: EntityId) -> str:
    result = jobs.source_work(colony, profile, eid)
    if result.outcome is not Outcome.OK:
        colony.world.get(eid, Agent).saying = f"s:{result.outcome.value}"
    return GO_TO_TARGET if result.handoff is Phase.TARGET else SOURCE_WORK


def go_to_target(colony: Colony, profile: Profile, eid: EntityId) -> str:
    if not colony.memory.agent(eid).path:
        return TARGET_WORK
    if _walk(colony, profile, eid) in (MoveResult.ARRIVED, MoveResult.WAYPOINT):
        return TARGET_WORK
    return GO_TO_TARGET


def target_work(colony: Colony, profile: Profile, eid: EntityId) -> str:
    result = jobs.target_work(colony, profile, eid)
    if result.outcome is not Outcome.OK:
        colony.world.get(eid, Agent).saying = f"t:{result.outcome.value}"
    return GO_TO_SOURCE if result.handoff is Phase.SOURCE else TARGET_WORK


def go_to_source(colony: Colony, profile: Profile, eid: EntityId) -> str:
    mem = colony.memory.agent(eid)
    if mem.path and _walk(colony, profile, eid, reverse=True) is not MoveResult.ARRIVED:
        return GO_TO_SOURCE
    mem.path_step = None
    return SOURCE_WORK


def make_scripted_machine(max_chain: int = 2) -> StepMachine:
    machine = StepMachine(SPAWNING, max_chain=max_chain)
    machine.register(SPAWNING, spawning, chain=True)
    machine.register(GO_TO_START, go_to_start, chain=True)
    machine.register(SOURCE_WORK, source_work)
    machine.register(GO_TO_TARGET, go_to_target, chain=True)
    machine.register(TARGET_WORK, target_work)
    machine.register(GO_TO_SOURCE, go_to_source, chain=True)
    return machine
