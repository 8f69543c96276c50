"""ServiceResult: what every service method hands back to the CLI.

A service never raises for an expected failure (unknown domain, missing
file, binding in use); it returns ``ok=False`` with one of the codes
below. The CLI renders the result and maps ``ok`` onto the exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Codes that originate in the service layer itself. The remaining codes
# (NOT_FOUND, ALREADY_EXISTS, INVALID_INPUT, IO_ERROR, PARSE_ERROR,
# DOWNLOAD_FAILED) come from ``CdnError.code``.
IN_USE = "IN_USE"
NO_TARGET = "NO_TARGET"


class ServiceError(BaseModel):
    """Why an operation failed; ``detail`` carries structured context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"upload"``, ``"list_domains"``, ...); the
            output layer dispatches renderers on it.
        data: Payload on success, and for some failures the partial state.
        warnings: Non-fatal notes, e.g. files left on disk after a removal.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def fail(
        cls,
        op: str,
        code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
