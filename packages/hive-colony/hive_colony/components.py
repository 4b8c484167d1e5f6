"""Colony components."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Agent:
    """A worker unit. ``spawning`` counts the ticks left before it can act."""

    role: str
    body: list[str] = field(default_factory=list)
    spawning: int = 0
    saying: str = ""


@dataclass
class Structure:
    """A built structure: spawn, extension, container, storage, tower, road, wall."""

    kind: str


@dataclass
class Durability:
    hits: int
    hits_max: int


@dataclass
class ResourceNode:
    """Marks an extraction node. Its remaining amount lives in its Store."""


@dataclass
class Pile:
    """Marks resource dropped on the ground."""


@dataclass
class Controller:
    """Zone controller that upgraders pour resource into."""

    level: int = 1
    progress: int = 0
    progress_total: int = 200

    def __post_init__(self) -> None:
        if self.progress_total <= 0:
            raise ValueError(f"progress_total must be > 0, got {self.progress_total}")


@dataclass
class Spawner:
    """Creation point state: the agent currently materializing, if any."""

    spawning: str | None = None


@dataclass
class Lifecycle:
    born_tick: int
    max_age: int  # -1 = immortal


COLONY_COMPONENTS = (
    Agent, Structure, Durability, ResourceNode, Pile, Controller, Spawner, Lifecycle,
)

SPAWN = "spawn"
EXTENSION = "extension"
CONTAINER = "container"
STORAGE = "storage"
TOWER = "tower"
ROAD = "road"
WALL_STRUCTURE = "constructedWall"
