"""Rule catalog — the ordered governance rules.

Each rule is a pure function ``(graph, config) -> list[str]`` returning
evidence lines; an empty list means the rule is satisfied. Rules read the
graph only, visit objects by ascending id, and look only at live objects
(see :mod:`eagov.domain.lifecycle`).

Catalog order is priority order: the engine stops at the first rule with
findings. To add a rule, append a ``GovernanceRule`` to a catalog.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Iterator, Sequence
from dataclasses import dataclass

from eagov.config.models import GovernanceConfig
from eagov.domain.lifecycle import is_live
from eagov.domain.model import ArchitectureObject
from eagov.domain.types import type_label
from eagov.governance.models import Severity
from eagov.infrastructure.graph.store import RepositoryGraph

type RuleFn = Callable[[RepositoryGraph, GovernanceConfig], list[str]]

REQUIRED_NAME = "EA_REQUIRED_NAME"
REQUIRED_OWNER = "EA_REQUIRED_OWNER"
TECHNICAL_TERM = "EA_CAPABILITY_TECHNICAL_TERM"
APPLICATION_SERVICE_PROVIDER = "EA_APPLICATION_SERVICE_REQUIRES_APPLICATION"


@dataclass(frozen=True)
class GovernanceRule:
    """A named, independently testable catalog entry."""

    rule_id: str
    title: str
    evaluate: RuleFn
    severity: Severity = Severity.ERROR


def live_objects(
    graph: RepositoryGraph,
    config: GovernanceConfig,
    types: Collection[str] | None = None,
) -> Iterator[ArchitectureObject]:
    """Live objects (optionally of *types*), ascending by id."""
    for obj in graph.objects():
        if types is not None and obj.type not in types:
            continue
        if is_live(obj, config.lifecycle_coverage):
            yield obj


# ---------------------------------------------------------------------------
# 1. Naming
# ---------------------------------------------------------------------------


def check_required_name(graph: RepositoryGraph, config: GovernanceConfig) -> list[str]:
    """Objects of named types need a non-blank ``name``."""
    return [
        f"{type_label(obj.type)} '{obj.id}' has no name"
        for obj in live_objects(graph, config, set(config.rules.named_types))
        if not obj.name
    ]


# ---------------------------------------------------------------------------
# 2. Ownership
# ---------------------------------------------------------------------------


def check_required_owner(graph: RepositoryGraph, config: GovernanceConfig) -> list[str]:
    """Every non-root object is owned, by ``ownerId`` or an inbound OWNS edge."""
    roots = set(config.rules.root_types)
    return [
        f"{type_label(obj.type)} '{obj.label}' has no owner"
        for obj in live_objects(graph, config)
        if obj.type not in roots and not graph.owners_of(obj.id)
    ]


# ---------------------------------------------------------------------------
# 3. Vocabulary
# ---------------------------------------------------------------------------

_WORD = re.compile(r"\w+")


def find_technical_term(name: str, terms: Sequence[str]) -> str | None:
    """Return the first denylisted term used in *name*, or None.

    Case-insensitive. Plain single-word terms must match a whole word (so
    "Rapid" does not hit "API"). Terms with punctuation ("CI/CD", "C#")
    must not touch a word character on either side. Multi-word terms match
    as a substring after collapsing whitespace.
    """
    words = set(_WORD.findall(name.lower()))
    collapsed = " ".join(name.lower().split())
    for term in terms:
        needle = " ".join(term.lower().split())
        if not needle:
            continue
        if " " in needle:
            if needle in collapsed:
                return term
        elif _WORD.fullmatch(needle):
            if needle in words:
                return term
        elif re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", collapsed):
            return term
    return None


def check_technical_terms(graph: RepositoryGraph, config: GovernanceConfig) -> list[str]:
    """Business-facing names must not use technical vocabulary."""
    evidence: list[str] = []
    terms = config.rules.technical_terms
    for obj in live_objects(graph, config, set(config.rules.vocabulary_types)):
        if not obj.name:
            continue
        term = find_technical_term(obj.name, terms)
        if term is not None:
            evidence.append(f"{type_label(obj.type)} '{obj.name}' uses a technical term: '{term}'")
    return evidence


# ---------------------------------------------------------------------------
# 4. Cardinality
# ---------------------------------------------------------------------------


def check_cardinality(graph: RepositoryGraph, config: GovernanceConfig) -> list[str]:
    """Governed objects need exactly one outgoing required edge to a live target."""
    evidence: list[str] = []
    coverage = config.lifecycle_coverage
    for req in config.rules.cardinality:
        for obj in live_objects(graph, config, {req.source_type}):
            found = 0
            for rel in graph.relationships_of_type(req.relationship_type, from_id=obj.id):
                target = graph.get_object(rel.to_id)
                if target is not None and target.type == req.target_type and is_live(
                    target, coverage
                ):
                    found += 1
            if found != 1:
                evidence.append(
                    f"{type_label(obj.type)} '{obj.label}' must belong to exactly one "
                    f"{type_label(req.target_type)} (found {found})"
                )
    return evidence


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

DEFAULT_CATALOG: tuple[GovernanceRule, ...] = (
    GovernanceRule(REQUIRED_NAME, "Missing name", check_required_name),
    GovernanceRule(REQUIRED_OWNER, "Missing owner", check_required_owner),
    GovernanceRule(TECHNICAL_TERM, "Technical term in business name", check_technical_terms),
    GovernanceRule(
        APPLICATION_SERVICE_PROVIDER,
        "Application service missing application",
        check_cardinality,
    ),
)


def find_rule(rule_id: str, catalog: Sequence[GovernanceRule] = DEFAULT_CATALOG) -> GovernanceRule:
    """Look up a catalog entry by id. Raises KeyError if absent."""
    for rule in catalog:
        if rule.rule_id == rule_id:
            return rule
    raise KeyError(rule_id)
