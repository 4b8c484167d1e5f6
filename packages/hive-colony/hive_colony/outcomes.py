"""Outcome codes and job-phase results."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Result of one job-phase attempt.

    The first six are produced by the job controller; the rest pass through
    from low-level actions.
    """

    OK = "ok"
    WAIT = "wait"
    NO_SOURCE = "no_source"
    NO_TARGET = "no_target"
    SOURCE_WORK_OFF = "source_work_off"
    TARGET_WORK_OFF = "target_work_off"
    NOT_IN_RANGE = "not_in_range"
    EMPTY = "empty"
    FULL = "full"
    INVALID_TARGET = "invalid_target"


class Phase(str, Enum):
    SOURCE = "source"
    TARGET = "target"


@dataclass(frozen=True)
class WorkResult:
    """Outcome of a work phase plus the phase to hand off to, if any."""

    outcome: Outcome
    handoff: Phase | None = None
