"""
autocluster.tier0_core.errors
──────────────────────────────
Error taxonomy for the fatal path. Anything raised from here aborts node
startup: a fabricated identity is worse than no identity. Advisory paths
(coercion mismatches, malformed tags, unknown backends) never raise; they
return degraded Outcomes instead (see tier0_core.result).
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class AutoclusterError(Exception):
    """
    Base class for all autocluster errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: printed to the operator when startup aborts
    - detail: internal context for logs
    - metadata: structured fields (offending key, raw value, ...)
    """

    code: str = "autocluster_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Node identity could not be resolved.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
                **self.metadata,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ConfigurationError(AutoclusterError):
    """Missing or unusable configuration value."""
    code = "configuration_error"


class ValidationError(AutoclusterError):
    """A value could not be interpreted."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.fields:
            d["error"]["fields"] = self.fields
        return d


class InvalidIntegerError(ValidationError):
    """Text that was expected to hold an integer does not."""
    code = "invalid_integer"


class UnsupportedTypeError(ValidationError):
    """A value has a type the operation cannot accept."""
    code = "unsupported_type"


class NotFoundError(AutoclusterError):
    """A required host resource (interface, address) does not exist."""
    code = "not_found"


class PreconditionError(AutoclusterError):
    """An upstream invariant does not hold; indicates a logic error."""
    code = "precondition_failed"


__all__ = [
    "AutoclusterError",
    "ConfigurationError",
    "ValidationError",
    "InvalidIntegerError",
    "UnsupportedTypeError",
    "NotFoundError",
    "PreconditionError",
]
