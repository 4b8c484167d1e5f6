"""System factories wiring the colony into the engine's tick loop."""
from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable

from hive_colony.components import Agent, Lifecycle, Spawner
from hive_colony.gc import collect_garbage
from hive_colony.lifecycle import ticks_to_live

if TYPE_CHECKING:
    from hive import TickContext, World

    from hive_colony.colony import Colony

System = Callable[["World", "TickContext"], None]


def make_gc_system(colony: Colony) -> System:
    def gc_system(world: World, ctx: TickContext) -> None:
        collect_garbage(colony)

    return gc_system


def make_survey_system(colony: Colony) -> System:
    def survey_system(world: World, ctx: TickContext) -> None:
        colony.access.survey(force=colony.survey_requested)
        colony.survey_requested = False

    return survey_system


def make_census_system(colony: Colony) -> System:
    def census_system(world: World, ctx: TickContext) -> None:
        colony.census.take(world, colony.memory, ctx.tick_number)

    return census_system


def make_spawning_system(colony: Colony) -> System:
    """Count down materializing agents and free spawners whose agent is done."""

    def spawning_system(world: World, ctx: TickContext) -> None:
        for _eid, (agent,) in world.query(Agent):
            if agent.spawning > 0:
                agent.spawning -= 1
        for _eid, (spawner,) in world.query(Spawner):
            if spawner.spawning is None:
                continue
            agent = world.find(spawner.spawning, Agent)
            if agent is None or agent.spawning <= 0:
                spawner.spawning = None

    return spawning_system


def make_population_system(colony: Colony) -> System:
    def population_system(world: World, ctx: TickContext) -> None:
        colony.population.plan()

    return population_system


def make_dispatch_system(colony: Colony) -> System:
    """Run every ready agent once, in id order.

    A failing agent is reported on stderr and as an ``agent_error`` event,
    and its step is reset; the other agents still run.
    """

    def dispatch_system(world: World, ctx: TickContext) -> None:
        for eid in sorted(eid for eid, _ in world.query(Agent)):
            agent = world.find(eid, Agent)
            if agent is None or agent.spawning > 0:
                continue
            profile = colony.profiles.find(agent.role)
            if profile is None:
                continue
            if colony.config.debug:
                mem = colony.memory.agent(eid)
                lc = world.find(eid, Lifecycle)
                print(
                    f"hive-colony: tick {ctx.tick_number} {eid} {agent.role}"
                    f" {mem.slot or 'basic'} {mem.step or 'no-step'}"
                    f" ttl={ticks_to_live(lc, ctx.tick_number) if lc else None}",
                    file=sys.stderr,
                )
            try:
                colony.work(profile, eid)
            except Exception:
                error = sys.exc_info()[1]
                print(f"hive-colony: agent {eid} error: {error}", file=sys.stderr)
                colony.events.emit(
                    ctx.tick_number, "agent_error", agent=eid, role=agent.role, error=repr(error),
                )
                mem = colony.memory.find_agent(eid)
                if mem is not None:
                    mem.step = colony.machine.initial if mem.slot is not None else None

    return dispatch_system


def make_structure_system(colony: Colony) -> System:
    def structure_system(world: World, ctx: TickContext) -> None:
        colony.structures.run(colony)

    return structure_system
