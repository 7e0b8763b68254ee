"""
Receipt model — the outcome of one external command.

Adapters run ``git``, ``makepkg`` and ``pacman`` and hand back a Receipt.
Failures are captured here, never raised: callers look at ``ok`` and
decide whether to stop.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of running a command through the shell runner."""

    command: list[str] = Field(default_factory=list)
    status: Literal["ok", "failed"] = "ok"
    return_code: int | None = None

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        command: list[str],
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(command=command, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(command=command, status="failed", error=error, **kwargs)
