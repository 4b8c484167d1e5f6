"""Basic work loop for agents without a slot."""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_spatial import MoveResult, Pos

from hive_colony import jobs
from hive_colony.components import Agent
from hive_colony.outcomes import Outcome, Phase

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony
    from hive_colony.profiles import Profile


def work(colony: Colony, profile: Profile, eid: EntityId) -> Outcome:
    """Run the agent's current phase once and approach its goal when out of range.

    The phase is persisted in the agent's ``step`` as ``"source"`` or
    ``"target"``; anything else reads as the source phase.
    """
    world = colony.world
    mem = colony.memory.agent(eid)
    phase = Phase.TARGET if mem.step == Phase.TARGET.value else Phase.SOURCE
    if phase is Phase.SOURCE:
        result = jobs.source_work(colony, profile, eid)
        goal, reach = mem.source, 1
    else:
        result = jobs.target_work(colony, profile, eid)
        goal, reach = mem.target, profile.target_range
    mem.step = (result.handoff or phase).value

    agent = world.get(eid, Agent)
    if result.outcome is Outcome.NOT_IN_RANGE:
        goal_pos = world.find(goal, Pos)
        if goal_pos is not None:
            moved = colony.mover.move_towards(world, eid, goal_pos, reach, steps=profile.speed)
            if moved in (MoveResult.MOVING, MoveResult.ARRIVED):
                mem.moved = colony.tick_number
            else:
                agent.saying = f"m:{moved.value}"
                return result.outcome
    if result.outcome is not Outcome.OK:
        agent.saying = f"{phase.value[0]}:{result.outcome.value}"
    return result.outcome
