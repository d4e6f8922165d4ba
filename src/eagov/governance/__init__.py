"""Governance — rule catalog, rule engine, and violation reporting."""

from eagov.governance.engine import RuleEngine, validate
from eagov.governance.models import Accepted, Rejected, Severity, Verdict, Violation
from eagov.governance.report import ViolationReport, report_payload, report_violation
from eagov.governance.rules import DEFAULT_CATALOG, GovernanceRule

__all__ = [
    "DEFAULT_CATALOG",
    "Accepted",
    "GovernanceRule",
    "Rejected",
    "RuleEngine",
    "Severity",
    "Verdict",
    "Violation",
    "ViolationReport",
    "report_payload",
    "report_violation",
    "validate",
]
