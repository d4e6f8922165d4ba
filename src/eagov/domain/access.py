"""Repository roles and the static role -> permission table.

Roles (per user per repository):

- Owner: full control over metadata, modeling, governance settings, exports.
- Architect: models and exports; cannot govern, delete baselines, or
  initialize the enterprise.
- Contributor: creates and edits elements and relationships, runs impact
  analysis; no deletes, governance, or imports.
- Viewer: read-only.

Owners do not bypass validation: governance still runs for every save.
Whether RBAC is enforced at all is a configuration value passed in by the
caller (``AccessConfig.rbac_enabled``); with RBAC off every permission is
granted (single-user mode) but bindings are still validated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    OWNER = "Owner"
    ARCHITECT = "Architect"
    CONTRIBUTOR = "Contributor"
    VIEWER = "Viewer"


class Permission(StrEnum):
    INITIALIZE_ENTERPRISE = "initializeEnterprise"
    CREATE_ELEMENT = "createElement"
    EDIT_ELEMENT = "editElement"
    DELETE_ELEMENT = "deleteElement"
    CREATE_RELATIONSHIP = "createRelationship"
    EDIT_RELATIONSHIP = "editRelationship"
    DELETE_RELATIONSHIP = "deleteRelationship"
    CREATE_BASELINE = "createBaseline"
    CREATE_VIEW = "createView"
    EDIT_VIEW = "editView"
    DELETE_BASELINE = "deleteBaseline"
    IMPORT = "import"
    BULK_EDIT = "bulkEdit"
    IMPACT_ANALYSIS = "impactAnalysis"
    MANAGE_RBAC = "manageRbac"
    CHANGE_GOVERNANCE_MODE = "changeGovernanceMode"
    EXPORT = "export"
    READ = "read"


ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.OWNER: "Full control: governance settings, metadata, modeling, and exports.",
    Role.ARCHITECT: (
        "Modeling focus: create/update objects and relationships, author views; "
        "cannot govern, delete baselines, or change ownership."
    ),
    Role.CONTRIBUTOR: (
        "Contribution focus: create/update elements and relationships; "
        "no deletes, governance, or imports."
    ),
    Role.VIEWER: "Read-only: browse, impact analysis, views and baselines; no edits.",
}

_MODELING = {
    Permission.CREATE_ELEMENT,
    Permission.EDIT_ELEMENT,
    Permission.CREATE_RELATIONSHIP,
    Permission.EDIT_RELATIONSHIP,
    Permission.CREATE_VIEW,
    Permission.EDIT_VIEW,
}

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.OWNER: frozenset(Permission),
    Role.ARCHITECT: frozenset(_MODELING | {Permission.EXPORT, Permission.READ}),
    Role.CONTRIBUTOR: frozenset(
        _MODELING | {Permission.IMPACT_ANALYSIS, Permission.EXPORT, Permission.READ}
    ),
    Role.VIEWER: frozenset({Permission.IMPACT_ANALYSIS, Permission.EXPORT, Permission.READ}),
}


@dataclass(frozen=True)
class RoleBinding:
    """Single role assignment for a user within a repository."""

    user_id: str
    role: str


def is_role(value: object) -> bool:
    return isinstance(value, str) and value in Role


def has_permission(role: str | Role, permission: str | Permission, *, rbac_enabled: bool) -> bool:
    """Check whether *role* grants *permission*.

    Unknown roles or permissions raise ``ValueError`` even in single-user
    mode so typos are caught before RBAC is switched on.
    """
    role = Role(role)
    permission = Permission(permission)
    if not rbac_enabled:
        return True
    return permission in ROLE_PERMISSIONS[role]


def validate_role_bindings(bindings: Iterable[RoleBinding]) -> list[str]:
    """Return a list of binding errors (empty when all bindings are valid)."""
    errors: list[str] = []
    seen: set[tuple[str, str]] = set()
    for binding in bindings:
        if not binding.user_id or not is_role(binding.role):
            errors.append(f"Invalid role binding: {binding.user_id!r} -> {binding.role!r}")
            continue
        key = (binding.user_id, binding.role)
        if key in seen:
            errors.append(f"Duplicate role binding for {binding.user_id} ({binding.role})")
            continue
        seen.add(key)
    return errors
