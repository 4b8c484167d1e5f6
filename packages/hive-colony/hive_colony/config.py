"""Colony configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColonyConfig:
    """Immutable tuning for the colony runtime.

    Attributes:
        agent_lifetime: Ticks an agent lives after it is created.
        spawn_ticks_per_part: Ticks needed to materialize each body part.
        carry_per_part: Bay capacity granted by each CARRY part.
        harvest_per_work: Units extracted per WORK part per tick.
        repair_per_work: Hits restored per WORK part per tick.
        tower_repair: Hits a tower restores per tick.
        tower_cost: Energy a tower spends per repair.
        event_log_size: Maximum retained events (0 for unbounded).
        max_chain: Extra step handlers a scripted agent may run in one tick.
        debug: Print one trace line per agent per tick to stderr.
    """

    agent_lifetime: int = 1500
    spawn_ticks_per_part: int = 3
    carry_per_part: int = 50
    harvest_per_work: int = 2
    repair_per_work: int = 100
    tower_repair: int = 200
    tower_cost: int = 10
    event_log_size: int = 500
    max_chain: int = 2
    debug: bool = False

    def __post_init__(self) -> None:
        for name in (
            "agent_lifetime", "spawn_ticks_per_part", "carry_per_part",
            "harvest_per_work", "repair_per_work",
            "tower_repair", "tower_cost",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.event_log_size < 0:
            raise ValueError(f"event_log_size must be >= 0, got {self.event_log_size}")
        if self.max_chain < 0:
            raise ValueError(f"max_chain must be >= 0, got {self.max_chain}")
