"""Garbage collection of memory left behind by dead agents."""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_colony.components import Agent

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony


def collect_garbage(colony: Colony) -> list[EntityId]:
    """Prune every remembered agent that is no longer alive.

    Releases its access point, clears any slot still bound to it and emits
    ``agent_lost``. Returns the pruned ids. Never creates memory entries.
    """
    world = colony.world
    lost = [eid for eid in colony.memory.agents if not world.has(eid, Agent)]
    for eid in lost:
        mem = colony.memory.agents[eid]
        colony.access.release(eid)
        colony.memory.forget_agent(eid)
        colony.events.emit(colony.tick_number, "agent_lost", agent=eid, role=mem.role)

    for zone in colony.memory.zones.values():
        for slot in zone.slots.values():
            if slot.agent is not None and not world.has(slot.agent, Agent):
                slot.agent = None
    return lost
