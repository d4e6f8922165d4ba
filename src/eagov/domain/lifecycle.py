"""Lifecycle coverage — which objects a governance pass examines.

A repository declares the lifecycle states it models (As-Is, To-Be or
Both). Rules only look at *live* objects: not soft-deleted, and either
untagged or tagged with a covered state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from eagov.domain.types import LifecycleCoverage, LifecycleState

if TYPE_CHECKING:
    from eagov.domain.model import ArchitectureObject

COVERED_STATES: dict[LifecycleCoverage, frozenset[LifecycleState]] = {
    LifecycleCoverage.AS_IS: frozenset({LifecycleState.AS_IS}),
    LifecycleCoverage.TO_BE: frozenset({LifecycleState.TO_BE}),
    LifecycleCoverage.BOTH: frozenset(LifecycleState),
}


def is_covered(state: LifecycleState | None, coverage: LifecycleCoverage) -> bool:
    """Untagged objects are covered by every coverage setting."""
    if state is None:
        return True
    return state in COVERED_STATES[coverage]


def is_live(obj: ArchitectureObject, coverage: LifecycleCoverage) -> bool:
    """Check whether *obj* is in scope for a governance pass."""
    if obj.attributes.deleted:
        return False
    return is_covered(obj.attributes.lifecycle_state, coverage)
