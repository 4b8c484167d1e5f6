"""Persisted colony memory: typed, versioned records for agents, zones and sources.

Records survive across ticks and process restarts through
:meth:`MemoryStore.snapshot` / :meth:`MemoryStore.restore`. Loading is
forgiving: unknown keys are dropped and missing or mistyped values fall back
to the field default, which the rest of the colony reads as "unknown,
recompute".
"""
from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from hive import EntityId, SnapshotError

MEMORY_VERSION = 1

R = TypeVar("R")
Check = Callable[[Any], bool]


@dataclass
class AgentMemory:
    role: str = ""
    source: str | None = None
    target: str | None = None
    step: str | None = None
    zone: str | None = None
    slot: str | None = None
    path: list[list[int]] | None = None
    path_step: int | None = None
    single_source: bool | None = None
    single_target: bool | None = None
    target_expires: int | None = None
    moved: int | None = None


@dataclass
class SlotMemory:
    """A single-occupancy functional slot of a zone."""

    role: str = ""
    start: list[int] | None = None
    source: str | None = None
    target: str | None = None
    path: list[list[int]] | None = None
    agent: str | None = None


@dataclass
class ZoneMemory:
    spawn: str | None = None
    slots: dict[str, SlotMemory] = field(default_factory=dict)


@dataclass
class AccessPoint:
    x: int
    y: int
    terrain: str = "plain"
    agent: str | None = None


@dataclass
class SourceMemory:
    zone: str | None = None
    access_points: list[AccessPoint] = field(default_factory=list)


# -- Field checks --

def _int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _str(v: Any) -> bool:
    return isinstance(v, str)


def _optional(check: Check) -> Check:
    return lambda v: v is None or check(v)


def _coord(v: Any) -> bool:
    return isinstance(v, list) and len(v) == 2 and all(_int(c) for c in v)


def _path(v: Any) -> bool:
    return isinstance(v, list) and all(
        isinstance(n, list) and 2 <= len(n) <= 3 and all(_int(c) for c in n) for n in v
    )


_AGENT_FIELDS: dict[str, Check] = {
    "role": _str,
    "source": _optional(_str),
    "target": _optional(_str),
    "step": _optional(_str),
    "zone": _optional(_str),
    "slot": _optional(_str),
    "path": _optional(_path),
    "path_step": _optional(_int),
    "single_source": _optional(lambda v: isinstance(v, bool)),
    "single_target": _optional(lambda v: isinstance(v, bool)),
    "target_expires": _optional(_int),
    "moved": _optional(_int),
}

_SLOT_FIELDS: dict[str, Check] = {
    "role": _str,
    "start": _optional(_coord),
    "source": _optional(_str),
    "target": _optional(_str),
    "path": _optional(_path),
    "agent": _optional(_str),
}

_POINT_FIELDS: dict[str, Check] = {
    "x": _int,
    "y": _int,
    "terrain": _str,
    "agent": _optional(_str),
}


def _load(cls: type[R], raw: Any, checks: dict[str, Check]) -> R | None:
    if not isinstance(raw, dict):
        return None
    kwargs = {
        name: copy.deepcopy(raw[name])
        for name, check in checks.items()
        if name in raw and check(raw[name])
    }
    try:
        return cls(**kwargs)
    except TypeError:
        # a required field was missing or invalid
        return None


def _load_zone(raw: Any) -> ZoneMemory | None:
    if not isinstance(raw, dict):
        return None
    zone = ZoneMemory(spawn=raw["spawn"] if _str(raw.get("spawn")) else None)
    slots = raw.get("slots")
    if isinstance(slots, dict):
        for name, slot_raw in slots.items():
            slot = _load(SlotMemory, slot_raw, _SLOT_FIELDS)
            if slot is not None:
                zone.slots[name] = slot
    return zone


def _load_source(raw: Any) -> SourceMemory | None:
    if not isinstance(raw, dict):
        return None
    source = SourceMemory(zone=raw["zone"] if _str(raw.get("zone")) else None)
    points = raw.get("access_points")
    if isinstance(points, list):
        for point_raw in points:
            point = _load(AccessPoint, point_raw, _POINT_FIELDS)
            if point is not None:
                source.access_points.append(point)
    return source


class MemoryStore:
    """Agent memory keyed by agent id, zone memory keyed by zone, source memory keyed by node id."""

    def __init__(self) -> None:
        self.agents: dict[EntityId, AgentMemory] = {}
        self.zones: dict[str, ZoneMemory] = {}
        self.sources: dict[EntityId, SourceMemory] = {}

    def agent(self, eid: EntityId) -> AgentMemory:
        """The agent's record, created empty on first use."""
        memory = self.agents.get(eid)
        if memory is None:
            memory = self.agents[eid] = AgentMemory()
        return memory

    def find_agent(self, eid: EntityId) -> AgentMemory | None:
        return self.agents.get(eid)

    def forget_agent(self, eid: EntityId) -> None:
        self.agents.pop(eid, None)

    def zone(self, name: str) -> ZoneMemory:
        memory = self.zones.get(name)
        if memory is None:
            memory = self.zones[name] = ZoneMemory()
        return memory

    def slot(self, zone: str | None, name: str | None) -> SlotMemory | None:
        if zone is None or name is None:
            return None
        memory = self.zones.get(zone)
        return memory.slots.get(name) if memory is not None else None

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": MEMORY_VERSION,
            "agents": {eid: dataclasses.asdict(m) for eid, m in self.agents.items()},
            "zones": {name: dataclasses.asdict(m) for name, m in self.zones.items()},
            "sources": {sid: dataclasses.asdict(m) for sid, m in self.sources.items()},
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version", MEMORY_VERSION)
        if not _int(version) or version > MEMORY_VERSION:
            raise SnapshotError(
                f"Unsupported memory version {version!r}, expected <= {MEMORY_VERSION}"
            )
        self.agents.clear()
        self.zones.clear()
        self.sources.clear()
        for eid, raw in _mapping(data.get("agents")).items():
            agent = _load(AgentMemory, raw, _AGENT_FIELDS)
            if agent is not None:
                self.agents[eid] = agent
        for name, raw in _mapping(data.get("zones")).items():
            zone = _load_zone(raw)
            if zone is not None:
                self.zones[name] = zone
        for sid, raw in _mapping(data.get("sources")).items():
            source = _load_source(raw)
            if source is not None:
                self.sources[sid] = source


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
