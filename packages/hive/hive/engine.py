"""Engine - tick loop, system ordering, and lifecycle hooks."""

from __future__ import annotations

import os
import random
from typing import Any, Callable

from hive.types import SnapshotError, System, TickContext
from hive.world import World

_SNAPSHOT_VERSION = 1


class Engine:
    """Runs registered systems once per tick, in registration order.

    There is no real-time pacing: the host decides when a tick happens and
    calls :meth:`tick` (or :meth:`run`).
    """

    def __init__(self, seed: int | None = None) -> None:
        self._world = World()
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_requested: bool = False
        self._tick_number = 0

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> World:
        return self._world

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[World, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[World, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            request_stop=self._request_stop,
            random=self._rng,
        )

    def tick(self) -> None:
        """Advance one tick and run every system against the same world."""
        self._stop_requested = False
        self._tick_number += 1
        ctx = self._context()
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break

    def run(self, n: int) -> None:
        self._stop_requested = False
        ctx = self._context()
        for hook in self._start_hooks:
            hook(self._world, ctx)

        for _ in range(n):
            self.tick()
            if self._stop_requested:
                break

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(self._world, ctx)

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "tick_number": self._tick_number,
            "seed": self._seed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "world": self._world.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        self._world.restore(data["world"])
        self._tick_number = data["tick_number"]
        self._seed = data["seed"]
        self._rng.setstate(_deserialize_rng_state(data["rng_state"]))


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() tuple to a JSON-compatible list."""
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
