"""Job controller: the source and target work phases every role shares."""
from __future__ import annotations

from typing import TYPE_CHECKING

from hive_colony.outcomes import Outcome, Phase, WorkResult

if TYPE_CHECKING:
    from hive import EntityId

    from hive_colony.colony import Colony
    from hive_colony.profiles import Profile


def _target_ready(colony: Colony, profile: Profile, eid: EntityId) -> bool:
    if not (profile.target_work and profile.can_work_target(colony, eid)):
        return False
    if profile.find_next_target:
        return colony.resolver.find_target(profile, eid) is not None
    return colony.resolver.target(profile, eid) is not None


def _source_ready(colony: Colony, profile: Profile, eid: EntityId) -> bool:
    if not (profile.source_work and profile.can_work_source(colony, eid)):
        return False
    return colony.resolver.source(profile, eid) is not None


def source_work(colony: Colony, profile: Profile, eid: EntityId) -> WorkResult:
    """Run one tick of source work.

    Hands off to the target phase when source work is disabled, when the
    bay is full, or when no source resolves, provided a target is workable.
    Otherwise the profile's source job runs and its outcome passes through.
    """
    if not profile.source_work:
        return WorkResult(Outcome.SOURCE_WORK_OFF, Phase.TARGET)
    if not profile.can_work_source(colony, eid):
        if _target_ready(colony, profile, eid):
            return WorkResult(Outcome.OK, Phase.TARGET)
        return WorkResult(Outcome.WAIT)
    if colony.resolver.source(profile, eid) is None:
        handoff = Phase.TARGET if _target_ready(colony, profile, eid) else None
        return WorkResult(Outcome.NO_SOURCE, handoff)
    return WorkResult(profile.source_job(colony, eid))


def target_work(colony: Colony, profile: Profile, eid: EntityId) -> WorkResult:
    """Mirror of :func:`source_work` for the delivery phase."""
    if not profile.target_work:
        return WorkResult(Outcome.TARGET_WORK_OFF, Phase.SOURCE)
    if not profile.can_work_target(colony, eid):
        if _source_ready(colony, profile, eid):
            return WorkResult(Outcome.OK, Phase.SOURCE)
        return WorkResult(Outcome.WAIT)
    if colony.resolver.target(profile, eid) is None:
        handoff = Phase.SOURCE if _source_ready(colony, profile, eid) else None
        return WorkResult(Outcome.NO_TARGET, handoff)
    return WorkResult(profile.target_job(colony, eid))
