"""Uniform result envelope for provider tool calls.

Provider-specific error shapes never cross this boundary: a call either
succeeds with ``data`` or fails with ``error`` and ``details``.
"""

from typing import Any

from pydantic import BaseModel


class ToolResult(BaseModel):
    """Tagged success/failure result of one tool operation."""

    ok: bool
    data: Any = None
    error: str | None = None
    details: str | None = None
    # error class name on failure, e.g. "ProviderCallFailed"
    kind: str | None = None

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str, details: str, kind: str = "ProviderCallFailed") -> "ToolResult":
        return cls(ok=False, error=error, details=details, kind=kind)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error, "details": self.details, "kind": self.kind}
