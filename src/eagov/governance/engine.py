"""Rule engine — run a rule catalog against a graph under a governance mode.

Two terminal outcomes per call: :class:`Accepted` or :class:`Rejected`.
Strict mode evaluates the catalog in order and stops at the first rule
with evidence. Advisory mode evaluates every rule but never blocks; its
findings ride along as ``Accepted.advisories``.

The engine never mutates the graph and keeps no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from eagov.config.models import GovernanceConfig, parse_governance_mode, parse_lifecycle_coverage
from eagov.domain.errors import ConfigurationError
from eagov.domain.types import GovernanceMode
from eagov.governance.models import Accepted, Rejected, Verdict, Violation
from eagov.governance.rules import DEFAULT_CATALOG, GovernanceRule
from eagov.infrastructure.graph.store import RepositoryGraph
from eagov.services.telemetry import trace_span

logger = logging.getLogger(__name__)


class RuleEngine:
    """Validate graphs against a fixed, ordered rule catalog."""

    def __init__(self, catalog: Sequence[GovernanceRule] = DEFAULT_CATALOG) -> None:
        self.catalog: tuple[GovernanceRule, ...] = tuple(catalog)
        seen: set[str] = set()
        for rule in self.catalog:
            if rule.rule_id in seen:
                msg = f"Duplicate rule id in catalog: {rule.rule_id}"
                raise ConfigurationError(msg)
            seen.add(rule.rule_id)

    def validate(self, graph: RepositoryGraph, config: GovernanceConfig) -> Verdict:
        """Return the verdict for *graph* under *config*.

        Raises ConfigurationError for an unrecognised mode or coverage.
        The graph's lock is held for the whole evaluation.
        """
        mode = parse_governance_mode(config.governance_mode)
        parse_lifecycle_coverage(config.lifecycle_coverage)

        with graph.exclusive():
            logger.debug("Validating %d objects in %s mode", len(graph), mode)
            if mode is GovernanceMode.ADVISORY:
                advisories = tuple(
                    violation
                    for rule in self.catalog
                    if (violation := self._evaluate(rule, graph, config)) is not None
                )
                logger.debug("Accepted with %d advisories", len(advisories))
                return Accepted(advisories=advisories)

            for rule in self.catalog:
                violation = self._evaluate(rule, graph, config)
                if violation is not None:
                    logger.debug(
                        "Rejected by %s (%d findings)",
                        violation.rule_id,
                        len(violation.highlights),
                    )
                    return Rejected(violation=violation)

            logger.debug("Accepted")
            return Accepted()

    @staticmethod
    def _evaluate(
        rule: GovernanceRule, graph: RepositoryGraph, config: GovernanceConfig
    ) -> Violation | None:
        with trace_span(rule.rule_id) as span:
            evidence = rule.evaluate(graph, config)
            if span is not None:
                span.annotate("findings", len(evidence))
        logger.debug("Rule %s: %d findings", rule.rule_id, len(evidence))
        if not evidence:
            return None
        return Violation(rule_id=rule.rule_id, highlights=tuple(evidence))


_default_engine = RuleEngine()


def validate(
    graph: RepositoryGraph,
    config: GovernanceConfig,
    *,
    catalog: Sequence[GovernanceRule] | None = None,
) -> Verdict:
    """Validate *graph* with *catalog* (the default catalog when omitted)."""
    engine = _default_engine if catalog is None else RuleEngine(catalog)
    return engine.validate(graph, config)
