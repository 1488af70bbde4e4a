"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Core components raise :class:`~catalyst.domain.errors.CatalystError`;
services convert those into a failed result so the CLI can report the
offending resource without a traceback.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from catalyst.domain.errors import CatalystError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CatalystError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.detail())


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_package"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (counts, timing, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: CatalystError, **data: Any) -> ServiceResult:
        """Failed result carrying *exc* as its structured error."""
        return cls(ok=False, op=op, data=data, error=ServiceError.from_exception(exc))
