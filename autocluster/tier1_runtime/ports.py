"""
autocluster.tier1_runtime.ports
────────────────────────────────
Port extraction for values that container linking may have rewritten
from ``5672`` into ``tcp://10.0.0.1:5672``. Only the trailing segment is
kept. Range checks belong to the caller.
"""
from __future__ import annotations

from typing import Any

from autocluster.tier0_core.coerce import as_integer
from autocluster.tier0_core.errors import InvalidIntegerError


def parse_port(value: Any) -> int | None:
    """
    Return the port held by ``value``.

    Usage:
        parse_port("5672")                  # → 5672
        parse_port("tcp://10.0.0.1:5672")   # → 5672
        parse_port(5672)                    # → 5672
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidIntegerError(
                user_message=f"Expected a port, got {value!r}.",
                value=repr(value),
            ) from exc
    if isinstance(value, str):
        segments = [s for s in value.split(":") if s]
        return as_integer(segments[-1] if segments else "")
    return as_integer(value)


__all__ = ["parse_port"]
