"""GovernanceService — permission-checked validation of repository graphs.

The service decides *which* configuration a validation runs under and
who may ask for it; the rule engine decides the verdict. Precedence for
the governance settings, highest first: explicit call arguments,
repository document metadata, then ``EagovSettings.governance``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from eagov.config.models import GovernanceConfig
from eagov.config.settings import EagovSettings
from eagov.domain.access import (
    ROLE_DESCRIPTIONS,
    ROLE_PERMISSIONS,
    Permission,
    Role,
    has_permission,
)
from eagov.domain.errors import ConfigurationError, GraphError, RepositoryLoadError
from eagov.governance.engine import RuleEngine
from eagov.governance.models import Accepted, Rejected
from eagov.governance.report import report_payload, report_violation
from eagov.governance.rules import DEFAULT_CATALOG, GovernanceRule
from eagov.infrastructure.graph.store import RepositoryGraph
from eagov.infrastructure.loader import load_repository
from eagov.services.base import BaseService
from eagov.services.result import GOVERNANCE_VIOLATION, ServiceResult
from eagov.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

_METADATA_KEYS = {
    "governance_mode": ("governanceMode", "governance_mode"),
    "lifecycle_coverage": ("lifecycleCoverage", "lifecycle_coverage"),
}


class GovernanceService(BaseService):
    """Validate graphs and describe the active catalog and roles."""

    def __init__(
        self,
        settings: EagovSettings | None = None,
        *,
        catalog: Sequence[GovernanceRule] = DEFAULT_CATALOG,
    ) -> None:
        super().__init__(settings)
        self._engine = RuleEngine(catalog)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        graph: RepositoryGraph,
        *,
        role: str | Role | None = None,
        permission: str | Permission = Permission.EXPORT,
        mode: str | None = None,
        coverage: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Validate an already-built graph on behalf of *role*.

        Rejections come back as ``ok=False`` with code
        ``GOVERNANCE_VIOLATION`` and the violation report in ``detail``.
        """
        return self._check(
            graph,
            role=role,
            permission=permission,
            mode=mode,
            coverage=coverage,
            metadata=metadata,
        )

    @traced
    def check_file(
        self,
        path: Path | str,
        *,
        role: str | Role | None = None,
        permission: str | Permission = Permission.EXPORT,
        mode: str | None = None,
        coverage: str | None = None,
    ) -> ServiceResult:
        """Load a repository document, then validate it like :meth:`check`."""
        op = "validate"
        path = Path(path)
        with trace_span("load_repository") as span:
            try:
                document = load_repository(path)
            except (RepositoryLoadError, GraphError) as exc:
                return ServiceResult.failure(op, exc.code, str(exc), path=str(path))
            if span is not None:
                span.annotate("objects", len(document.graph))

        result = self._check(
            document.graph,
            role=role,
            permission=permission,
            mode=mode,
            coverage=coverage,
            metadata=document.metadata,
        )
        return result.model_copy(update={"data": {**result.data, "source": str(path)}})

    @traced
    def list_rules(self) -> ServiceResult:
        """Describe the active catalog, in evaluation order."""
        config = self._settings.governance
        items = [
            {
                "id": rule.rule_id,
                "title": rule.title,
                "severity": str(rule.severity),
                "priority": index,
            }
            for index, rule in enumerate(self._engine.catalog, start=1)
        ]
        return ServiceResult(
            ok=True,
            op="rules",
            data={
                "items": items,
                "count": len(items),
                "governance_mode": str(config.governance_mode),
                "lifecycle_coverage": str(config.lifecycle_coverage),
            },
        )

    @traced
    def list_roles(self, role: str | None = None) -> ServiceResult:
        """Describe repository roles and their permissions."""
        op = "roles"
        if role is None:
            roles = list(Role)
        else:
            try:
                roles = [Role(role)]
            except ValueError:
                allowed = ", ".join(Role)
                return ServiceResult.failure(
                    op, "NOT_FOUND", f"Unknown role {role!r}; expected one of: {allowed}"
                )

        items = [
            {
                "id": str(r),
                "description": ROLE_DESCRIPTIONS[r],
                "permissions": sorted(str(p) for p in ROLE_PERMISSIONS[r]),
            }
            for r in roles
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": items,
                "count": len(items),
                "rbac_enabled": self._settings.access.rbac_enabled,
            },
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def resolve_config(
        self,
        *,
        mode: str | None = None,
        coverage: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> GovernanceConfig:
        """Merge call arguments and document metadata over the settings.

        Raises ConfigurationError for unrecognised values.
        """
        config = self._settings.governance
        updates: dict[str, Any] = {}
        for field, keys in _METADATA_KEYS.items():
            for key in keys:
                if metadata and metadata.get(key) is not None:
                    updates[field] = metadata[key]
                    break
        if mode is not None:
            updates["governance_mode"] = mode
        if coverage is not None:
            updates["lifecycle_coverage"] = coverage
        if not updates:
            return config
        return GovernanceConfig.from_mapping(
            {
                "governance_mode": config.governance_mode,
                "lifecycle_coverage": config.lifecycle_coverage,
                "rules": config.rules,
                **updates,
            }
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check(
        self,
        graph: RepositoryGraph,
        *,
        role: str | Role | None,
        permission: str | Permission,
        mode: str | None,
        coverage: str | None,
        metadata: Mapping[str, Any] | None,
    ) -> ServiceResult:
        op = "validate"
        access = self._settings.access
        role = role if role is not None else access.default_role

        try:
            allowed = has_permission(role, permission, rbac_enabled=access.rbac_enabled)
        except ValueError as exc:
            return ServiceResult.failure(op, "FORBIDDEN", str(exc), role=str(role))
        if not allowed:
            logger.info("Role %s denied %s", role, permission)
            return ServiceResult.failure(
                op,
                "FORBIDDEN",
                f"Role '{role}' lacks permission '{permission}'",
                role=str(role),
                permission=str(permission),
            )

        try:
            config = self.resolve_config(mode=mode, coverage=coverage, metadata=metadata)
            with trace_span("rule_engine"):
                verdict = self._engine.validate(graph, config)
        except ConfigurationError as exc:
            return ServiceResult.failure(op, exc.code, str(exc))

        payload = report_payload(verdict, self._engine.catalog)
        data = {
            **payload,
            "governance_mode": str(config.governance_mode),
            "lifecycle_coverage": str(config.lifecycle_coverage),
            "objects": len(graph),
            "relationships": len(graph.relationships()),
        }

        if isinstance(verdict, Rejected):
            report = report_violation(verdict, self._engine.catalog)
            logger.info("Validation rejected by %s", report.rule_id)
            return ServiceResult.failure(
                op,
                GOVERNANCE_VIOLATION,
                report.headline,
                data=data,
                **report.model_dump(mode="json"),
            )

        assert isinstance(verdict, Accepted)
        warnings = [
            f"{advisory.rule_id}: {line}"
            for advisory in verdict.advisories
            for line in advisory.highlights
        ]
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
