"""Shared pytest fixtures and test helpers for eagov tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from eagov.config.models import GovernanceConfig
from eagov.infrastructure.graph.store import RepositoryGraph
from eagov.services.telemetry import disable_telemetry

STRICT = GovernanceConfig()
ADVISORY = GovernanceConfig(governance_mode="Advisory")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test from an empty directory with no EAGOV_* variables set.

    Also undoes what a CLI invocation leaves behind: root log handlers,
    the ``eagov`` log level, and the telemetry switch.
    """
    for key in list(os.environ):
        if key.startswith("EAGOV_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    eagov_level = logging.getLogger("eagov").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("eagov").setLevel(eagov_level)


# ---------------------------------------------------------------------------
# Document builders
# ---------------------------------------------------------------------------


def obj(object_id: str, object_type: str, **attributes: Any) -> dict[str, Any]:
    """Object spec in repository document form."""
    return {"id": object_id, "type": object_type, "attributes": attributes}


def rel(from_id: str, to_id: str, rel_type: str, **attributes: Any) -> dict[str, Any]:
    """Relationship spec in repository document form."""
    return {"fromId": from_id, "toId": to_id, "type": rel_type, "attributes": attributes}


def compliant_document() -> dict[str, Any]:
    """A small repository that passes every default rule."""
    return {
        "objects": [
            obj("ent-1", "Enterprise", name="Acme"),
            obj("dept-1", "Department", name="Finance"),
            obj("cap-1", "Capability", name="Customer Management", ownerId="dept-1"),
            obj("app-1", "Application", name="CRM", ownerId="dept-1"),
            obj("svc-1", "ApplicationService", name="Customer Lookup", ownerId="dept-1"),
        ],
        "relationships": [
            rel("ent-1", "dept-1", "OWNS"),
            rel("svc-1", "app-1", "PROVIDED_BY"),
        ],
    }


def build_graph(
    objects: list[dict[str, Any]] | None = None,
    relationships: list[dict[str, Any]] | None = None,
) -> RepositoryGraph:
    return RepositoryGraph.from_document(
        {"objects": objects or [], "relationships": relationships or []}
    )


def write_document(path: Path, document: dict[str, Any]) -> Path:
    """Write *document* as JSON, or YAML when *path* ends in .yaml/.yml."""
    if path.suffix in {".yaml", ".yml"}:
        from ruamel.yaml import YAML

        yaml = YAML(typ="safe")
        yaml.default_flow_style = False
        with path.open("w", encoding="utf-8") as fh:
            yaml.dump(document, fh)
    else:
        path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def compliant_graph() -> RepositoryGraph:
    return RepositoryGraph.from_document(compliant_document())


@pytest.fixture
def compliant_file(tmp_path: Path) -> Path:
    return write_document(tmp_path / "repository.json", compliant_document())
