"""Tests for the individual catalog rules."""

import pytest

from eagov.config.models import CardinalityRequirement, GovernanceConfig, RulesConfig
from eagov.governance.rules import (
    APPLICATION_SERVICE_PROVIDER,
    DEFAULT_CATALOG,
    REQUIRED_NAME,
    REQUIRED_OWNER,
    TECHNICAL_TERM,
    check_cardinality,
    check_required_name,
    check_required_owner,
    check_technical_terms,
    find_rule,
    find_technical_term,
)
from eagov.infrastructure.graph.store import RepositoryGraph
from tests.conftest import STRICT, build_graph, obj, rel


class TestCatalog:
    def test_priority_order(self) -> None:
        assert [r.rule_id for r in DEFAULT_CATALOG] == [
            REQUIRED_NAME,
            REQUIRED_OWNER,
            TECHNICAL_TERM,
            APPLICATION_SERVICE_PROVIDER,
        ]

    def test_find_rule(self) -> None:
        assert find_rule(REQUIRED_OWNER).title == "Missing owner"
        with pytest.raises(KeyError):
            find_rule("EA_NOPE")


class TestRequiredName:
    def test_missing_and_blank_names(self) -> None:
        graph = build_graph(
            [
                obj("svc-2", "ApplicationService", name="   "),
                obj("cap-1", "Capability"),
                obj("app-1", "Application", name="CRM"),
            ]
        )
        assert check_required_name(graph, STRICT) == [
            "Capability 'cap-1' has no name",
            "Application Service 'svc-2' has no name",
        ]

    def test_only_named_types_checked(self) -> None:
        config = GovernanceConfig(rules=RulesConfig(named_types=("Capability",)))
        graph = build_graph([obj("app-1", "Application")])
        assert check_required_name(graph, config) == []

    def test_deleted_objects_skipped(self) -> None:
        graph = build_graph([obj("cap-1", "Capability", _deleted=True)])
        assert check_required_name(graph, STRICT) == []

    def test_uncovered_lifecycle_skipped(self) -> None:
        config = GovernanceConfig(lifecycle_coverage="As-Is")
        graph = build_graph([obj("cap-1", "Capability", lifecycleState="To-Be")])
        assert check_required_name(graph, config) == []
        assert check_required_name(graph, STRICT) == ["Capability 'cap-1' has no name"]


class TestRequiredOwner:
    def test_unowned_uses_name_or_id(self) -> None:
        graph = build_graph([obj("cap-1", "Capability", name="Billing"), obj("x", "Project")])
        assert check_required_owner(graph, STRICT) == [
            "Capability 'Billing' has no owner",
            "Project 'x' has no owner",
        ]

    def test_root_types_exempt(self) -> None:
        graph = build_graph([obj("ent-1", "Enterprise", name="Acme")])
        assert check_required_owner(graph, STRICT) == []

    def test_owner_attribute_satisfies(self) -> None:
        graph = build_graph([obj("cap-1", "Capability", name="Billing", ownerId="dept-1")])
        assert check_required_owner(graph, STRICT) == []

    def test_owns_edge_satisfies(self) -> None:
        graph = build_graph(
            [obj("ent-1", "Enterprise", name="Acme"), obj("dept-1", "Department", name="Ops")],
            [rel("ent-1", "dept-1", "OWNS")],
        )
        assert check_required_owner(graph, STRICT) == []


class TestFindTechnicalTerm:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("API Enablement", "API"),
            ("api enablement", "API"),
            ("Customer Database Management", "Database"),
            ("Rapid Onboarding", None),
            ("Restful Services", None),
            ("Customer Management", None),
            ("Order   message  queue handling", "Message Queue"),
        ],
    )
    def test_matches(self, name: str, expected: str | None) -> None:
        assert find_technical_term(name, ("API", "Database", "REST", "Message Queue")) == expected

    @pytest.mark.parametrize(
        ("name", "terms", "expected"),
        [
            ("CI/CD Enablement", ("CI/CD",), "CI/CD"),
            ("ci/cd enablement", ("CI/CD",), "CI/CD"),
            ("Node.js Adoption", ("Node.js",), "Node.js"),
            ("C# Skills Development", ("C#",), "C#"),
            ("Abc# Planning", ("C#",), None),
            ("Continuous Integration", ("CI/CD",), None),
        ],
    )
    def test_terms_with_punctuation(
        self, name: str, terms: tuple[str, ...], expected: str | None
    ) -> None:
        assert find_technical_term(name, terms) == expected

    def test_punctuated_term_rejects_capability(self) -> None:
        config = GovernanceConfig(rules=RulesConfig(technical_terms=("CI/CD",)))
        graph = build_graph([obj("cap-1", "Capability", name="CI/CD Enablement")])
        assert check_technical_terms(graph, config) == [
            "Capability 'CI/CD Enablement' uses a technical term: 'CI/CD'"
        ]

    def test_first_term_in_list_order(self) -> None:
        assert find_technical_term("SQL API", ("API", "SQL")) == "API"

    def test_blank_terms_ignored(self) -> None:
        assert find_technical_term("Anything", ("", "  ")) is None


class TestTechnicalTerms:
    def test_capability_with_term(self) -> None:
        graph = build_graph([obj("cap-1", "Capability", name="API Enablement")])
        assert check_technical_terms(graph, STRICT) == [
            "Capability 'API Enablement' uses a technical term: 'API'"
        ]

    def test_sub_capability_checked(self) -> None:
        graph = build_graph([obj("sc-1", "SubCapability", name="Kubernetes Hosting")])
        assert check_technical_terms(graph, STRICT) == [
            "Sub Capability 'Kubernetes Hosting' uses a technical term: 'Kubernetes'"
        ]

    def test_other_types_not_checked(self) -> None:
        graph = build_graph([obj("app-1", "Application", name="Customer API")])
        assert check_technical_terms(graph, STRICT) == []

    def test_custom_denylist(self) -> None:
        config = GovernanceConfig(rules=RulesConfig(technical_terms=("Blockchain",)))
        graph = build_graph([obj("cap-1", "Capability", name="Blockchain Ledger")])
        assert check_technical_terms(graph, config) == [
            "Capability 'Blockchain Ledger' uses a technical term: 'Blockchain'"
        ]


class TestCardinality:
    def _graph(self, *providers: str) -> RepositoryGraph:
        objects = [obj("svc-1", "ApplicationService", name="Lookup")]
        objects += [obj(p, "Application", name=p.upper()) for p in providers]
        return build_graph(objects, [rel("svc-1", p, "PROVIDED_BY") for p in providers])

    def test_exactly_one(self) -> None:
        assert check_cardinality(self._graph("app-1"), STRICT) == []

    def test_zero(self) -> None:
        assert check_cardinality(self._graph(), STRICT) == [
            "Application Service 'Lookup' must belong to exactly one Application (found 0)"
        ]

    def test_two(self) -> None:
        assert check_cardinality(self._graph("app-1", "app-2"), STRICT) == [
            "Application Service 'Lookup' must belong to exactly one Application (found 2)"
        ]

    def test_wrong_target_type_not_counted(self) -> None:
        graph = build_graph(
            [obj("svc-1", "ApplicationService", name="Lookup"), obj("t-1", "Technology")],
            [rel("svc-1", "t-1", "PROVIDED_BY")],
        )
        assert check_cardinality(graph, STRICT) == [
            "Application Service 'Lookup' must belong to exactly one Application (found 0)"
        ]

    def test_deleted_target_not_counted(self) -> None:
        graph = build_graph(
            [
                obj("svc-1", "ApplicationService", name="Lookup"),
                obj("app-1", "Application", _deleted=True),
                obj("app-2", "Application"),
            ],
            [rel("svc-1", "app-1", "PROVIDED_BY"), rel("svc-1", "app-2", "PROVIDED_BY")],
        )
        assert check_cardinality(graph, STRICT) == []

    def test_custom_requirement(self) -> None:
        config = GovernanceConfig(
            rules=RulesConfig(
                cardinality=(
                    CardinalityRequirement(
                        source_type="Project",
                        relationship_type="REALIZED_BY",
                        target_type="Programme",
                    ),
                )
            )
        )
        graph = build_graph([obj("p-1", "Project", name="Migration")])
        assert check_cardinality(graph, config) == [
            "Project 'Migration' must belong to exactly one Programme (found 0)"
        ]
