"""ServiceResult and ServiceError — what every service call hands back.

A governance rejection is a result, not an exception: ``ok=False`` with
code ``GOVERNANCE_VIOLATION`` and the violation report as ``detail``.
Accepted validations carry advisory reports under ``data["advisories"]``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

GOVERNANCE_VIOLATION = "GOVERNANCE_VIOLATION"


class ServiceError(BaseModel):
    """Error code, human message and structured detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Operation succeeded; for ``validate``, the graph was accepted.
        op: Operation name (``validate``, ``rules``, ``roles``).
        data: Payload. Validation results keep it on rejection too, so
            the scope (mode, coverage, counts) is reported either way.
        warnings: One line per advisory evidence line.
        error: Set whenever ``ok`` is False.
        meta: Telemetry span tree when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @property
    def rejected(self) -> bool:
        """True when a governance rule blocked the operation."""
        return self.error is not None and self.error.code == GOVERNANCE_VIOLATION

    @property
    def findings(self) -> list[dict[str, Any]]:
        """Violation reports: the blocking one, or the advisories."""
        if self.rejected:
            assert self.error is not None
            return [self.error.detail]
        return list(self.data.get("advisories") or [])

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
