"""RepositoryGraph — in-memory typed graph of architecture objects.

Backed by a NetworkX MultiDiGraph so that parallel relationships of the
same type between the same pair are kept (cardinality rules count them).
Built fresh by the caller for each validation; the governance engine
only reads it.

Structural errors (duplicate ids, dangling endpoints) are raised eagerly
on insertion, so a store that finished building is structurally valid.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import networkx as nx
from pydantic import BaseModel, ValidationError

from eagov.domain.errors import DanglingReferenceError, DuplicateIdError, InvalidElementError
from eagov.domain.model import ArchitectureObject, Relationship
from eagov.domain.types import OWNERSHIP_RELATIONSHIP_TYPES, RelationshipType

logger = logging.getLogger(__name__)

type ObjectSpec = ArchitectureObject | Mapping[str, Any]
type RelationshipSpec = Relationship | Mapping[str, Any]


def _coerce[M: BaseModel](model_cls: type[M], spec: M | Mapping[str, Any]) -> M:
    if isinstance(spec, model_cls):
        return spec
    try:
        return model_cls.model_validate(spec)
    except ValidationError as exc:
        kind = model_cls.__name__
        msg = f"Invalid {kind}: {exc.errors()[0]['msg']} ({_ref(spec)})"
        raise InvalidElementError(msg) from exc


def _ref(spec: Any) -> str:
    if isinstance(spec, Mapping):
        if "id" in spec:
            return f"id={spec['id']!r}"
        return f"{spec.get('fromId')!r} -> {spec.get('toId')!r}"
    return repr(spec)


class RepositoryGraph:
    """Typed, attributed graph of objects (nodes) and relationships (edges)."""

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._relationships: list[Relationship] = []
        self._lock = threading.RLock()

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> RepositoryGraph:
        """Build a graph from ``{"objects": [...], "relationships": [...]}``.

        All objects are added before any relationship, so document order
        between the two lists does not matter.
        """
        graph = cls()
        graph.add_objects(document.get("objects") or [])
        graph.add_relationships(document.get("relationships") or [])
        return graph

    # ------------------------------------------------------------------
    # Mutation (caller-side only)
    # ------------------------------------------------------------------

    def add_object(self, spec: ObjectSpec) -> ArchitectureObject:
        """Insert an object. Raises DuplicateIdError if the id is taken."""
        obj = _coerce(ArchitectureObject, spec)
        with self._lock:
            if obj.id in self._graph:
                raise DuplicateIdError(obj.id)
            self._graph.add_node(obj.id, obj=obj)
        logger.debug("Added %s object %s", obj.type, obj.id)
        return obj

    def add_objects(self, specs: Iterable[ObjectSpec]) -> None:
        for spec in specs:
            self.add_object(spec)

    def add_relationship(self, spec: RelationshipSpec) -> Relationship:
        """Insert a relationship. Raises DanglingReferenceError for unknown endpoints."""
        rel = _coerce(Relationship, spec)
        with self._lock:
            for end, node_id in (("source", rel.from_id), ("target", rel.to_id)):
                if node_id not in self._graph:
                    raise DanglingReferenceError(node_id, end=end, rel_type=str(rel.type))
            self._graph.add_edge(rel.from_id, rel.to_id, key=len(self._relationships), rel=rel)
            self._relationships.append(rel)
        logger.debug("Added %s relationship %s -> %s", rel.type, rel.from_id, rel.to_id)
        return rel

    def add_relationships(self, specs: Iterable[RelationshipSpec]) -> None:
        for spec in specs:
            self.add_relationship(spec)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._graph

    def get_object(self, object_id: str) -> ArchitectureObject | None:
        if object_id not in self._graph:
            return None
        return self._graph.nodes[object_id]["obj"]

    def objects(self) -> tuple[ArchitectureObject, ...]:
        """All objects, ordered by ascending id."""
        return tuple(self._graph.nodes[nid]["obj"] for nid in sorted(self._graph.nodes))

    def relationships(self) -> tuple[Relationship, ...]:
        """All relationships, in insertion order."""
        return tuple(self._relationships)

    def relationships_of_type(
        self,
        rel_type: RelationshipType | str,
        *,
        from_id: str | None = None,
        to_id: str | None = None,
    ) -> tuple[Relationship, ...]:
        """Relationships of *rel_type*, optionally filtered by endpoint.

        Results keep insertion order.
        """
        rel_type = RelationshipType(rel_type)
        if from_id is not None or to_id is not None:
            candidates = self._incident(from_id=from_id, to_id=to_id)
        else:
            candidates = iter(self._relationships)
        return tuple(
            rel
            for rel in candidates
            if rel.type == rel_type
            and (from_id is None or rel.from_id == from_id)
            and (to_id is None or rel.to_id == to_id)
        )

    def owners_of(self, object_id: str) -> tuple[str, ...]:
        """Ids owning *object_id*, via inbound OWNS edges or a direct ``ownerId``.

        The object counts as owned iff the result is non-empty. Sorted for
        stable output. Raises KeyError for an unknown id.
        """
        obj = self.get_object(object_id)
        if obj is None:
            raise KeyError(object_id)
        owners = {
            rel.from_id
            for rel in self._incident(to_id=object_id)
            if rel.type in OWNERSHIP_RELATIONSHIP_TYPES
        }
        direct = (obj.attributes.owner_id or "").strip()
        if direct:
            owners.add(direct)
        return tuple(sorted(owners))

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the repository document shape."""
        return {
            "objects": [obj.to_dict() for obj in self.objects()],
            "relationships": [rel.to_dict() for rel in self._relationships],
        }

    # ------------------------------------------------------------------
    # Exclusive access
    # ------------------------------------------------------------------

    @contextmanager
    def exclusive(self) -> Iterator[RepositoryGraph]:
        """Hold the store's lock for the duration of the block.

        Re-entrant, so a validation running under ``exclusive()`` can still
        call the read methods. Released on normal exit and on error.
        """
        with self._lock:
            yield self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _incident(
        self, *, from_id: str | None = None, to_id: str | None = None
    ) -> Iterator[Relationship]:
        """Edges leaving *from_id* (or entering *to_id*), ordered by insertion key."""
        anchor = from_id if from_id is not None else to_id
        if anchor is None or anchor not in self._graph:
            return iter(())
        if from_id is not None:
            edges = self._graph.out_edges(from_id, keys=True, data="rel")
        else:
            edges = self._graph.in_edges(to_id, keys=True, data="rel")
        ordered = sorted(edges, key=lambda edge: edge[2])
        return (rel for _src, _dst, _key, rel in ordered)
