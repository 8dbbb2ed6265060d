"""ServiceResult and ServiceError — the adjustment service contract.

INVARIANT: Every public SalaryAdjustmentService operation returns a
ServiceResult. Business rejections and configuration lookups surface here;
precondition faults are raised, never wrapped.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Machine-readable failure codes carried by :class:`ServiceError`."""

    VALIDATION_REJECTED = "VALIDATION_REJECTED"
    UNKNOWN_RULE = "UNKNOWN_RULE"


class ServiceError(BaseModel):
    """Structured failure payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one adjustment operation.

    Attributes:
        ok: True when every invoked rule accepted and the increase was applied.
        op: Operation name (e.g. ``"adjust_with_all"``).
        data: Salary and date before/after the adjustment on success.
        warnings: Non-fatal notes about the operation.
        error: First failing rule's reason, or an unknown-rule error.
        meta: Optional metadata (telemetry spans when enabled).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def rejected(self) -> bool:
        """True only for a business rejection (not an unknown rule)."""
        return self.error is not None and self.error.code == ErrorCode.VALIDATION_REJECTED

    @property
    def reason(self) -> str | None:
        return self.error.message if self.error is not None else None
