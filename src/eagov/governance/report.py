"""Violation reporter — turn verdicts into display payloads. No I/O."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from eagov.governance.models import Accepted, Rejected, Severity, Verdict, Violation
from eagov.governance.rules import DEFAULT_CATALOG, GovernanceRule, find_rule


class ViolationReport(BaseModel):
    """A violation joined with its catalog entry, ready for display."""

    model_config = {"frozen": True}

    rule_id: str
    title: str
    severity: Severity
    highlights: list[str]

    @property
    def headline(self) -> str:
        return f"{self.rule_id}: {self.title}"


def report_violation(
    violation: Violation | Rejected,
    catalog: Sequence[GovernanceRule] = DEFAULT_CATALOG,
) -> ViolationReport:
    """Build the report for a violation (or a rejection's violation).

    Rules missing from *catalog* are reported under their id with
    error severity.
    """
    if isinstance(violation, Rejected):
        violation = violation.violation
    try:
        rule = find_rule(violation.rule_id, catalog)
        title, severity = rule.title, rule.severity
    except KeyError:
        title, severity = violation.rule_id, Severity.ERROR
    return ViolationReport(
        rule_id=violation.rule_id,
        title=title,
        severity=severity,
        highlights=list(violation.highlights),
    )


def report_payload(
    verdict: Verdict,
    catalog: Sequence[GovernanceRule] = DEFAULT_CATALOG,
) -> dict[str, Any]:
    """Serialisable summary of a verdict.

    Shape: ``{"accepted": bool, "violation": {...} | None, "advisories": [...]}``.
    """
    if isinstance(verdict, Accepted):
        return {
            "accepted": True,
            "violation": None,
            "advisories": [
                report_violation(v, catalog).model_dump(mode="json") for v in verdict.advisories
            ],
        }
    return {
        "accepted": False,
        "violation": report_violation(verdict, catalog).model_dump(mode="json"),
        "advisories": [],
    }
