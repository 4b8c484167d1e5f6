"""System factories for store regeneration and decay."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from hive_store.store import Store

if TYPE_CHECKING:
    from hive import EntityId, TickContext, World


@dataclass
class Regen:
    """Refills the entity's Store to capacity every ``interval`` ticks."""

    interval: int
    countdown: int = 0


@dataclass
class Decay:
    """Loses ``ceil(amount / divisor)`` units per tick."""

    divisor: int = 1000


def make_regen_system(
    on_regen: Callable[[World, TickContext, EntityId], None] | None = None,
) -> Callable[[World, TickContext], None]:
    """Return a system that refills renewable stores.

    The countdown starts when the store is first drawn below capacity, so an
    untouched node never ticks.
    """

    def regen_system(world: World, ctx: TickContext) -> None:
        for eid, (regen, store) in list(world.query(Regen, Store)):
            if regen.countdown <= 0:
                if store.capacity != -1 and store.amount < store.capacity:
                    regen.countdown = regen.interval
                continue
            regen.countdown -= 1
            if regen.countdown == 0:
                store.amount = store.capacity
                if on_regen is not None:
                    on_regen(world, ctx, eid)

    return regen_system


def make_decay_system(
    on_empty: Callable[[World, TickContext, EntityId], None] | None = None,
) -> Callable[[World, TickContext], None]:
    """Return a system that shrinks decaying stores and despawns them once empty.

    ``on_empty(world, ctx, eid)`` fires before the despawn.
    """

    def decay_system(world: World, ctx: TickContext) -> None:
        for eid, (decay, store) in list(world.query(Decay, Store)):
            if store.amount > 0:
                store.amount -= min(store.amount, math.ceil(store.amount / decay.divisor))
            if store.amount <= 0:
                if on_empty is not None:
                    on_empty(world, ctx, eid)
                world.despawn(eid)

    return decay_system
