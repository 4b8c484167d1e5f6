"""hive - A tick-driven entity engine for worker-agent simulations."""

from hive.engine import Engine
from hive.events import Event, EventLog
from hive.filters import Not
from hive.types import DeadEntityError, EntityId, SnapshotError, TickContext
from hive.world import World

__all__ = [
    "Engine",
    "World",
    "Not",
    "Event",
    "EventLog",
    "TickContext",
    "EntityId",
    "DeadEntityError",
    "SnapshotError",
]
