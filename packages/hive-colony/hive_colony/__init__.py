"""hive-colony - Worker-agent behavior engine: roles, assignment, jobs and population."""
from __future__ import annotations

# Components
from hive_colony.components import (
    CONTAINER, EXTENSION, ROAD, SPAWN, STORAGE, TOWER, WALL_STRUCTURE,
    Agent, Controller, Durability, Lifecycle, Pile, ResourceNode, Spawner, Structure,
)

# Framework objects
from hive_colony.colony import Colony
from hive_colony.config import ColonyConfig
from hive_colony.snapshot import ColonySnapshot
from hive_colony.census import Census
from hive_colony.access import AccessPoints
from hive_colony.resolver import AssignmentResolver
from hive_colony.population import AUTO, ENERGY, PopulationController
from hive_colony.memory import (
    MEMORY_VERSION, AccessPoint, AgentMemory, MemoryStore, SlotMemory, SourceMemory, ZoneMemory,
)

# Profiles and registries
from hive_colony.profiles import Profile
from hive_colony.roles import Carrier, Harvester, Repairer, Upgrader
from hive_colony.registry import ProfileRegistry, default_profiles
from hive_colony.structures import StructureRegistry, default_structures, run_tower

# Jobs and steps
from hive_colony.outcomes import Outcome, Phase, WorkResult
from hive_colony.jobs import source_work, target_work
from hive_colony.steps import make_scripted_machine
from hive_colony.gc import collect_garbage

# Collaborators
from hive_colony.actions import Actions, WorldActions
from hive_colony.bodies import (
    CARRY, MOVE, PART_COSTS, WORK,
    affordable_composition, body_cost, carry_capacity, count_parts, minimal_composition,
)
from hive_colony.layout import add_controller, add_node, add_pile, add_spawner, add_structure

__all__ = [
    # Facade
    "Colony",
    "ColonyConfig",
    "ColonySnapshot",
    # Components
    "Agent",
    "Structure",
    "Durability",
    "ResourceNode",
    "Pile",
    "Controller",
    "Spawner",
    "Lifecycle",
    "SPAWN",
    "EXTENSION",
    "CONTAINER",
    "STORAGE",
    "TOWER",
    "ROAD",
    "WALL_STRUCTURE",
    # Profiles
    "Profile",
    "Harvester",
    "Carrier",
    "Repairer",
    "Upgrader",
    "ProfileRegistry",
    "default_profiles",
    # Assignment and jobs
    "AssignmentResolver",
    "AccessPoints",
    "Census",
    "Outcome",
    "Phase",
    "WorkResult",
    "source_work",
    "target_work",
    "make_scripted_machine",
    # Population
    "PopulationController",
    "AUTO",
    "ENERGY",
    "WORK",
    "CARRY",
    "MOVE",
    "PART_COSTS",
    "body_cost",
    "count_parts",
    "carry_capacity",
    "minimal_composition",
    "affordable_composition",
    # Memory
    "MEMORY_VERSION",
    "MemoryStore",
    "AgentMemory",
    "ZoneMemory",
    "SlotMemory",
    "SourceMemory",
    "AccessPoint",
    "collect_garbage",
    # Collaborators
    "Actions",
    "WorldActions",
    "StructureRegistry",
    "default_structures",
    "run_tower",
    # Layout
    "add_node",
    "add_pile",
    "add_structure",
    "add_spawner",
    "add_controller",
]
