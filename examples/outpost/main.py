"""Outpost - headless hive-colony demo.

One zone with two extraction nodes, a spawner, a couple of extensions, a
tower and a controller. A scripted harvester slot is planned on the first
node; the rest of the population is auto-spawned. Prints a status line
every report interval and a summary of the event log at the end.

Run:
    python examples/outpost/main.py --ticks 500 --report 50
"""
from __future__ import annotations

import argparse
import json

from hive_spatial import WALL, TerrainMap, straight_path
from hive_store import Store

from hive_colony import (
    EXTENSION, TOWER, Colony, ColonyConfig, Controller,
    add_controller, add_node, add_spawner, add_structure,
)

ZONE = "W1"


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def build_outpost(seed: int, debug: bool = False) -> Colony:
    colony = Colony(seed=seed, config=ColonyConfig(debug=debug))
    world = colony.world

    terrain = TerrainMap()
    terrain.fill_rect((0, 0), (49, 2), WALL)
    terrain.fill_rect((14, 20), (14, 30), WALL)
    colony.add_terrain(ZONE, terrain)

    spawn = add_spawner(world, ZONE, 25, 25, eid="Spawn1")
    for x in (27, 28):
        add_structure(world, EXTENSION, ZONE, x, 27)
    add_structure(world, TOWER, ZONE, 23, 27)
    add_structure(world, "constructedWall", ZONE, 30, 30, hits=1000, hits_max=300000)
    add_structure(world, "road", ZONE, 24, 25, hits=2500, hits_max=5000)
    add_controller(world, ZONE, 35, 20, eid="Controller")

    east = add_node(world, ZONE, 18, 25, eid="node-east")
    add_node(world, ZONE, 40, 10, eid="node-north")

    start = (19, 25)
    colony.plan_slot(
        ZONE, "east", "harvester", start=start, source=east, target=spawn,
        path=straight_path(start, (24, 25)),
    )
    colony.set_zone_spawner(ZONE, spawn)
    return colony


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

def status_line(colony: Colony) -> str:
    world = colony.world
    counts = ", ".join(f"{role}={n}" for role, n in sorted(colony.census.counts().items()))
    energy = colony.population.budget(ZONE)
    controller = world.get("Controller", Controller)
    return (
        f"tick {colony.tick_number:>5}  energy={energy:<4}"
        f"  ctrl=L{controller.level} {controller.progress}/{controller.progress_total}"
        f"  [{counts or 'empty'}]"
    )


def summary(colony: Colony) -> str:
    kinds = colony.events.counts()
    lines = ["Events:"]
    lines += [f"  {kind:<20} {n}" for kind, n in sorted(kinds.items())]
    spawner = colony.world.get("Spawn1", Store)
    lines.append(f"Spawn1 store: {spawner.amount}/{spawner.capacity}")
    return "\n".join(lines)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Outpost - hive-colony headless demo")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--ticks", type=int, default=300, help="Ticks to run (default: 300)")
    p.add_argument("--report", type=int, default=25, help="Status interval in ticks (default: 25)")
    p.add_argument("--debug", action="store_true", help="Trace every agent on stderr")
    p.add_argument("--snapshot", type=str, default=None,
                   metavar="FILE", help="Write a JSON snapshot to FILE when done")
    args = p.parse_args()
    args.report = max(1, args.report)
    return args


def main() -> None:
    args = parse_args()
    colony = build_outpost(args.seed, args.debug)

    for _ in range(args.ticks):
        colony.tick()
        if colony.tick_number % args.report == 0:
            print(status_line(colony))

    print(summary(colony))
    if args.snapshot:
        with open(args.snapshot, "w") as f:
            json.dump(colony.snapshot(), f)
        print(f"Snapshot written to {args.snapshot}")


if __name__ == "__main__":
    main()
