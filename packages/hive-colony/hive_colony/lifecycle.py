"""Agent lifespans and what an agent leaves behind when it expires."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from hive_spatial import Pos
from hive_store import Store

from hive_colony.actions import drop_pile
from hive_colony.components import Agent, Lifecycle

if TYPE_CHECKING:
    from hive import EntityId, TickContext, World

    from hive_colony.colony import Colony


def ticks_to_live(lc: Lifecycle, tick: int) -> int | None:
    """Ticks left before expiry, or None for immortal entities."""
    if lc.max_age <= 0:
        return None
    return max(0, lc.born_tick + lc.max_age - tick)


def drop_cargo(world: World, eid: EntityId) -> int:
    """Empty the agent's bay onto the pile under it. Returns the amount dropped."""
    bay = world.find(eid, Store)
    pos = world.find(eid, Pos)
    if bay is None or pos is None or bay.amount <= 0:
        return 0
    dropped = bay.amount
    world.get(drop_pile(world, pos), Store).amount += dropped
    bay.amount = 0
    return dropped


def make_death_system(colony: Colony) -> Callable[[World, TickContext], None]:
    """Expire entities at the end of their lifespan.

    Agents drop what they carry and a ``died`` event is recorded before the
    despawn. Entities with ``max_age <= 0`` never expire.
    """

    def death_system(world: World, ctx: TickContext) -> None:
        expired = [
            eid for eid, (lc,) in world.query(Lifecycle)
            if ticks_to_live(lc, ctx.tick_number) == 0
        ]
        for eid in expired:
            agent = world.find(eid, Agent)
            if agent is not None:
                colony.events.emit(
                    ctx.tick_number, "died",
                    agent=eid, role=agent.role, cause="old_age", dropped=drop_cargo(world, eid),
                )
            world.despawn(eid)

    return death_system
