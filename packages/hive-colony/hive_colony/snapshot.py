from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hive_spatial import Pos, TerrainMap
from hive_store import Decay, Regen, Store

from hive_colony.components import COLONY_COMPONENTS

if TYPE_CHECKING:
    from hive import Engine, EventLog

    from hive_colony.memory import MemoryStore

_SNAPSHOT_COMPONENTS = COLONY_COMPONENTS + (Pos, Store, Regen, Decay)


class ColonySnapshot:
    """Bundles the engine snapshot with colony memory, events and terrains.

    Restoring mutates the given memory store, event log and terrain mapping
    in place, so services holding references to them stay valid.
    """

    def __init__(
        self,
        memory: MemoryStore | None = None,
        event_log: EventLog | None = None,
        terrains: dict[str, TerrainMap] | None = None,
    ) -> None:
        self._memory = memory
        self._event_log = event_log
        self._terrains = terrains

    def snapshot(self, engine: Engine) -> dict[str, Any]:
        data = engine.snapshot()
        colony: dict[str, Any] = {}
        if self._memory is not None:
            colony["memory"] = self._memory.snapshot()
        if self._event_log is not None:
            colony["events"] = self._event_log.snapshot()
        if self._terrains is not None:
            colony["terrains"] = {zone: t.snapshot() for zone, t in self._terrains.items()}
        data["colony"] = colony
        return data

    def restore(self, engine: Engine, data: dict[str, Any]) -> None:
        for ctype in _SNAPSHOT_COMPONENTS:
            engine.world.register_component(ctype)
        engine.restore(data)
        colony = data.get("colony", {})
        if self._memory is not None:
            self._memory.restore(colony.get("memory", {}))
        if self._event_log is not None:
            self._event_log.restore(colony.get("events", []))
        if self._terrains is not None:
            self._terrains.clear()
            for zone, terrain in colony.get("terrains", {}).items():
                self._terrains[zone] = TerrainMap.from_snapshot(terrain)
