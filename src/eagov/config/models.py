"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, eagov.toml only contains overrides.
A fresh repository needs no config file at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from eagov.domain.access import Role
from eagov.domain.errors import ConfigurationError
from eagov.domain.types import GovernanceMode, LifecycleCoverage, ObjectType, RelationshipType

# --- Enum parsing (fail fast, never default) ---


def _parse_enum[E: (GovernanceMode, LifecycleCoverage)](
    enum_cls: type[E], value: Any, label: str
) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    allowed = ", ".join(m.value for m in enum_cls)
    msg = f"Unknown {label} {value!r}; expected one of: {allowed}"
    raise ConfigurationError(msg)


def parse_governance_mode(value: Any) -> GovernanceMode:
    """Parse a governance mode, case-insensitively. Raises ConfigurationError."""
    return _parse_enum(GovernanceMode, value, "governance mode")


def parse_lifecycle_coverage(value: Any) -> LifecycleCoverage:
    """Parse a lifecycle coverage value. Raises ConfigurationError."""
    return _parse_enum(LifecycleCoverage, value, "lifecycle coverage")


# --- eagov.toml sections ---


class CardinalityRequirement(BaseModel):
    """Objects of *source_type* need exactly one *relationship_type* edge to *target_type*."""

    model_config = {"frozen": True}

    source_type: ObjectType
    relationship_type: RelationshipType
    target_type: ObjectType


DEFAULT_TECHNICAL_TERMS: tuple[str, ...] = (
    "API",
    "Microservice",
    "Database",
    "Server",
    "Kubernetes",
    "Docker",
    "Middleware",
    "ETL",
    "SQL",
    "REST",
    "SOAP",
    "Mainframe",
    "ESB",
    "Message Queue",
)


class RulesConfig(BaseModel):
    """[governance.rules] section."""

    model_config = {"frozen": True}

    named_types: tuple[ObjectType, ...] = tuple(ObjectType)
    root_types: tuple[ObjectType, ...] = (ObjectType.ENTERPRISE,)
    vocabulary_types: tuple[ObjectType, ...] = (
        ObjectType.CAPABILITY,
        ObjectType.SUB_CAPABILITY,
    )
    technical_terms: tuple[str, ...] = DEFAULT_TECHNICAL_TERMS
    cardinality: tuple[CardinalityRequirement, ...] = (
        CardinalityRequirement(
            source_type=ObjectType.APPLICATION_SERVICE,
            relationship_type=RelationshipType.PROVIDED_BY,
            target_type=ObjectType.APPLICATION,
        ),
    )


class GovernanceConfig(BaseModel):
    """[governance] section — the per-call governance configuration record.

    Accepts both snake_case (TOML, env) and the camelCase keys used by
    repository metadata (``governanceMode``, ``lifecycleCoverage``).

    Untrusted input goes through :meth:`from_mapping`, which reports an
    unknown mode or coverage as ConfigurationError. Direct construction
    raises pydantic's ValidationError instead.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    governance_mode: GovernanceMode = Field(
        default=GovernanceMode.STRICT,
        validation_alias=AliasChoices("governance_mode", "governanceMode"),
    )
    lifecycle_coverage: LifecycleCoverage = Field(
        default=LifecycleCoverage.BOTH,
        validation_alias=AliasChoices("lifecycle_coverage", "lifecycleCoverage"),
    )
    rules: RulesConfig = Field(default_factory=RulesConfig)

    @field_validator("governance_mode", mode="before")
    @classmethod
    def _mode(cls, value: Any) -> GovernanceMode:
        return parse_governance_mode(value)

    @field_validator("lifecycle_coverage", mode="before")
    @classmethod
    def _coverage(cls, value: Any) -> LifecycleCoverage:
        return parse_lifecycle_coverage(value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GovernanceConfig:
        """Build from a metadata record, raising ConfigurationError on bad input."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigurationError(describe_validation_error(exc)) from exc

    @property
    def is_strict(self) -> bool:
        return self.governance_mode is GovernanceMode.STRICT


class AccessConfig(BaseModel):
    """[access] section."""

    model_config = {"frozen": True}

    rbac_enabled: bool = False
    default_role: Role = Role.OWNER


class EagovConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    governance: GovernanceConfig = Field(default_factory=GovernanceConfig)
    access: AccessConfig = Field(default_factory=AccessConfig)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors to ``loc: msg`` pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        cause = err.get("ctx", {}).get("error")
        msg = str(cause) if isinstance(cause, ConfigurationError) else err["msg"]
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts)
