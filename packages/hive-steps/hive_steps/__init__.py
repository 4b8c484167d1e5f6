"""hive-steps - Persisted step machines for the hive engine."""
from __future__ import annotations

from hive_steps.machine import StepHandler, StepMachine

__all__ = ["StepHandler", "StepMachine"]
