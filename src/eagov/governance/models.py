"""Governance value objects — violations and the two terminal verdicts.

All frozen; created per validation call and discarded afterwards.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field


class Severity(StrEnum):
    """How a rule's findings are presented. Strict mode blocks on any rule."""

    ERROR = "error"
    WARNING = "warning"


class Violation(BaseModel):
    """A failed rule and its ordered evidence lines."""

    model_config = {"frozen": True}

    rule_id: str
    highlights: tuple[str, ...] = Field(min_length=1)


class Accepted(BaseModel):
    """The graph may be persisted or exported.

    ``advisories`` is only populated in Advisory mode: findings that would
    have blocked under Strict, surfaced for information.
    """

    model_config = {"frozen": True}

    ok: Literal[True] = True
    advisories: tuple[Violation, ...] = ()


class Rejected(BaseModel):
    """The first blocking violation found under Strict mode."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    violation: Violation


type Verdict = Accepted | Rejected
