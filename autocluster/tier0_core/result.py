"""
autocluster.tier0_core.result
──────────────────────────────
Typed outcome envelope for operations that degrade instead of failing.
A degraded Outcome still carries a usable value (the safe default) plus a
stable reason code, so callers and tests can branch on what happened
without scraping log output. Fatal conditions are raised, never wrapped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Status(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Value plus how it was obtained."""
    value: T
    status: Status = Status.OK
    reason: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def degraded(self) -> bool:
        return self.status is Status.DEGRADED

    def as_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "status": self.status.value,
            "reason": self.reason,
            "detail": self.detail,
        }


def ok(value: T) -> Outcome[T]:
    """Return a successful Outcome."""
    return Outcome(value=value)


def degraded(value: T, reason: str, /, **detail: Any) -> Outcome[T]:
    """Return a degraded Outcome carrying the fallback value."""
    return Outcome(value=value, status=Status.DEGRADED, reason=reason, detail=dict(detail))


__all__ = ["Status", "Outcome", "ok", "degraded"]
