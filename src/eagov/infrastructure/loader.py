"""Repository document loading — JSON or YAML into a RepositoryGraph.

Document shape::

    metadata:            # optional, repository-level governance settings
      governanceMode: Strict
      lifecycleCoverage: As-Is
    objects:
      - {id: ent-1, type: Enterprise, attributes: {name: Acme}}
    relationships:
      - {fromId: ent-1, toId: cap-1, type: OWNS}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from eagov.domain.errors import RepositoryLoadError
from eagov.infrastructure.graph.store import RepositoryGraph

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


@dataclass(frozen=True)
class RepositoryDocument:
    """A loaded repository: its graph plus any repository-level metadata."""

    graph: RepositoryGraph
    metadata: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None


def read_document(path: Path) -> dict[str, Any]:
    """Parse a repository file into a plain mapping.

    ``.yaml``/``.yml`` files are read with ruamel.yaml (safe loader);
    everything else is treated as JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        msg = f"Cannot read repository file {path}: {exc}"
        raise RepositoryLoadError(msg) from exc

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = YAML(typ="safe").load(text)
        else:
            data = json.loads(text)
    except (YAMLError, json.JSONDecodeError) as exc:
        msg = f"Cannot parse repository file {path}: {exc}"
        raise RepositoryLoadError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Repository file {path} must contain a mapping, got {type(data).__name__}"
        raise RepositoryLoadError(msg)
    for key in ("objects", "relationships"):
        if key in data and data[key] is not None and not isinstance(data[key], list):
            msg = f"'{key}' in {path} must be a list"
            raise RepositoryLoadError(msg)
    return data


def load_repository(path: Path) -> RepositoryDocument:
    """Read *path* and build its graph.

    Structural errors from the graph store (duplicate ids, dangling
    references, invalid elements) propagate unchanged.
    """
    data = read_document(path)
    graph = RepositoryGraph.from_document(data)
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        msg = f"'metadata' in {path} must be a mapping"
        raise RepositoryLoadError(msg)
    return RepositoryDocument(graph=graph, metadata=dict(metadata), source=path)
