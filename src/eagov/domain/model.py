"""Architecture objects and relationships.

Attribute bags are open mappings: the well-known keys (``name``,
``ownerId``, ``lifecycleState``, ``_deleted``) are typed optional fields,
and anything else is kept as an extra so it round-trips unchanged.
Keys on the wire are camelCase; Python attribute names are snake_case.

INVARIANT: ``id`` and ``type`` never change after creation. Re-typing an
object is modeled as delete + create.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from eagov.domain.types import LifecycleState, ObjectType, RelationshipType


class Attributes(BaseModel):
    """Open attribute mapping shared by objects and relationships."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    deleted: bool = Field(default=False, alias="_deleted")

    def get(self, key: str, default: Any = None) -> Any:
        """Look up an attribute by its wire name, including extras."""
        data = self.to_dict()
        return data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to a wire-format mapping (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_defaults=True)


class ObjectAttributes(Attributes):
    """Attributes of an architecture object."""

    name: str | None = None
    owner_id: str | None = Field(
        default=None,
        alias="ownerId",
        validation_alias=AliasChoices("ownerId", "owner_id"),
    )
    lifecycle_state: LifecycleState | None = Field(
        default=None,
        alias="lifecycleState",
        validation_alias=AliasChoices("lifecycleState", "lifecycle_state"),
    )

    @field_validator("name", "owner_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def display_name(self) -> str:
        """The name with surrounding whitespace removed ('' if unset)."""
        return (self.name or "").strip()


class ArchitectureObject(BaseModel):
    """A typed, attributed node in the repository graph."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    type: ObjectType
    attributes: ObjectAttributes = Field(default_factory=ObjectAttributes)

    @property
    def name(self) -> str:
        return self.attributes.display_name

    @property
    def label(self) -> str:
        """Name if present, otherwise the id."""
        return self.name or self.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": str(self.type),
            "attributes": self.attributes.to_dict(),
        }


class Relationship(BaseModel):
    """A typed, directed edge between two objects."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: str = Field(alias="fromId", min_length=1)
    to_id: str = Field(alias="toId", min_length=1)
    type: RelationshipType
    attributes: Attributes = Field(default_factory=Attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromId": self.from_id,
            "toId": self.to_id,
            "type": str(self.type),
            "attributes": self.attributes.to_dict(),
        }
