"""Object types, relationship types, and governance enums.

Both type sets are closed but extensible: adding a member here is the
only change needed for the graph store and loader to accept it.
"""

from __future__ import annotations

import re
from enum import StrEnum


class ObjectType(StrEnum):
    """Architecture object types."""

    ENTERPRISE = "Enterprise"
    DEPARTMENT = "Department"
    CAPABILITY = "Capability"
    SUB_CAPABILITY = "SubCapability"
    BUSINESS_SERVICE = "BusinessService"
    BUSINESS_PROCESS = "BusinessProcess"
    APPLICATION = "Application"
    APPLICATION_SERVICE = "ApplicationService"
    TECHNOLOGY = "Technology"
    PROGRAMME = "Programme"
    PROJECT = "Project"


class RelationshipType(StrEnum):
    """Directed relationship kinds. OWNS points from owner to owned."""

    OWNS = "OWNS"
    HAS = "HAS"
    PROVIDED_BY = "PROVIDED_BY"
    REALIZED_BY = "REALIZED_BY"
    SUPPORTS = "SUPPORTS"
    DEPENDS_ON = "DEPENDS_ON"
    SERVED_BY = "SERVED_BY"
    IMPACTS = "IMPACTS"


class GovernanceMode(StrEnum):
    """Policy strictness. Advisory never blocks."""

    STRICT = "Strict"
    ADVISORY = "Advisory"


class LifecycleCoverage(StrEnum):
    """Which lifecycle states a repository models."""

    AS_IS = "As-Is"
    TO_BE = "To-Be"
    BOTH = "Both"


class LifecycleState(StrEnum):
    """Lifecycle state carried by an individual object."""

    AS_IS = "As-Is"
    TO_BE = "To-Be"


# Relationship types whose source is treated as an owner of the target.
OWNERSHIP_RELATIONSHIP_TYPES: frozenset[RelationshipType] = frozenset({RelationshipType.OWNS})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def type_label(object_type: str) -> str:
    """Human-readable label for a type: ``ApplicationService`` -> ``Application Service``."""
    return _CAMEL_BOUNDARY.sub(" ", str(object_type))
