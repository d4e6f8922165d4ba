"""Exception taxonomy.

Structural and configuration problems are exceptions. Governance
violations are not: they are ``Rejected`` values returned by the engine.
"""

from __future__ import annotations


class EagovError(Exception):
    """Base class for all eagov exceptions."""


class GraphError(EagovError):
    """A structural defect detected while building a repository graph."""

    code = "GRAPH_ERROR"


class DuplicateIdError(GraphError):
    """An object with the same id is already present."""

    code = "DUPLICATE_ID"

    def __init__(self, object_id: str) -> None:
        super().__init__(f"Object '{object_id}' already exists")
        self.object_id = object_id


class DanglingReferenceError(GraphError):
    """A relationship endpoint does not name an existing object."""

    code = "DANGLING_REFERENCE"

    def __init__(self, missing_id: str, *, end: str, rel_type: str) -> None:
        super().__init__(f"{rel_type} relationship {end} '{missing_id}' does not exist")
        self.missing_id = missing_id
        self.end = end
        self.rel_type = rel_type


class InvalidElementError(GraphError):
    """An object or relationship spec failed schema validation."""

    code = "INVALID_ELEMENT"


class ConfigurationError(EagovError, ValueError):
    """Malformed governance configuration (unknown mode, coverage, ...)."""

    code = "INVALID_CONFIG"


class RepositoryLoadError(EagovError):
    """A repository document could not be read or parsed."""

    code = "LOAD_FAILED"
