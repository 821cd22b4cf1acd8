"""
autocluster.tier0_core.coerce
──────────────────────────────
Normalizes heterogeneous input (text, bytes, integers, symbols) into a
canonical form before the rest of the package consumes it.

Two policies apply:
  - symbol and string coercion never raise. A value of an unsupported
    type is logged and handed back unchanged; callers check the shape.
  - integer coercion raises InvalidIntegerError on non-numeric text,
    because no default integer is safe.

The ``coerce_*`` functions return an Outcome so callers can see whether
the value was degraded; the ``as_*`` functions log and unwrap it.
"""
from __future__ import annotations

import re
import threading
from typing import Any

from autocluster.tier0_core.errors import InvalidIntegerError
from autocluster.tier0_core.logging import get_logger
from autocluster.tier0_core.result import Outcome, degraded, ok

logger = get_logger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


# ── Symbol ────────────────────────────────────────────────────────────────────

class Symbol(str):
    """
    Interned text value. ``Symbol("rabbit") is Symbol("rabbit")`` holds,
    and a Symbol compares equal to the plain string with the same text.
    """

    __slots__ = ()

    _table: dict[str, "Symbol"] = {}
    _lock = threading.Lock()

    def __new__(cls, text: str = "") -> "Symbol":
        text = str.__str__(text)
        with cls._lock:
            sym = cls._table.get(text)
            if sym is None:
                sym = super().__new__(cls, text)
                cls._table[text] = sym
            return sym

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"

    def __str__(self) -> str:
        return str.__str__(self)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, bytes)) and len(value) == 0)


def _unsupported(value: Any, target: str) -> Outcome[Any]:
    return degraded(value, "unsupported_type", target=target, type=type(value).__name__)


def _unwrap(outcome: Outcome[Any]) -> Any:
    if outcome.degraded:
        logger.error(
            f"coerce.{outcome.reason}",
            value=repr(outcome.value),
            **outcome.detail,
        )
    return outcome.value


# ── Symbol coercion ───────────────────────────────────────────────────────────

def coerce_symbol(value: Any) -> Outcome[Any]:
    if isinstance(value, Symbol):
        return ok(value)
    if isinstance(value, str):
        return ok(Symbol(value))
    if isinstance(value, bytes):
        try:
            return ok(Symbol(value.decode("utf-8")))
        except UnicodeDecodeError:
            return _unsupported(value, "symbol")
    return _unsupported(value, "symbol")


def as_symbol(value: Any) -> Any:
    """Return ``value`` as a Symbol, or unchanged (logged) if it has no text form."""
    return _unwrap(coerce_symbol(value))


# ── Integer coercion ──────────────────────────────────────────────────────────

def as_integer(value: Any) -> int | None:
    """
    Return ``value`` as an integer.

    Empty input (None, "" or b"") yields None, which is distinct from 0.
    Non-numeric text raises InvalidIntegerError.
    """
    if _is_empty(value):
        return None
    if isinstance(value, bool):
        return _unwrap(_unsupported(value, "integer"))
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidIntegerError(
            user_message=f"Expected an integer, got {value!r}.",
            value=repr(value),
        )
    if isinstance(value, (str, bytes)):
        try:
            text = value.decode("utf-8") if isinstance(value, bytes) else str(value)
        except UnicodeDecodeError as exc:
            raise InvalidIntegerError(
                user_message=f"Expected an integer, got {value!r}.",
                value=repr(value),
            ) from exc
        if not _INTEGER.fullmatch(text.strip()):
            raise InvalidIntegerError(
                user_message=f"Expected an integer, got {text!r}.",
                value=text,
            )
        return int(text.strip(), 10)
    return _unwrap(_unsupported(value, "integer"))


# ── String coercion ───────────────────────────────────────────────────────────

def _flatten(parts: list | tuple) -> str | None:
    chunks: list[str] = []
    for part in parts:
        if isinstance(part, (list, tuple)):
            nested = _flatten(part)
            if nested is None:
                return None
            chunks.append(nested)
            continue
        outcome = coerce_string(part)
        if outcome.degraded:
            return None
        chunks.append(outcome.value)
    return "".join(chunks)


def coerce_string(value: Any) -> Outcome[Any]:
    if _is_empty(value):
        return ok("")
    if isinstance(value, str):
        return ok(str.__str__(value))
    if isinstance(value, bytes):
        try:
            return ok(value.decode("utf-8"))
        except UnicodeDecodeError:
            return _unsupported(value, "string")
    if isinstance(value, int) and not isinstance(value, bool):
        return ok(str(value))
    if isinstance(value, (list, tuple)):
        text = _flatten(value)
        if text is not None:
            return ok(text)
    return _unsupported(value, "string")


def as_string(value: Any) -> Any:
    """Return ``value`` as flat text, or unchanged (logged) if it has no text form."""
    return _unwrap(coerce_string(value))


__all__ = [
    "Symbol",
    "coerce_symbol",
    "coerce_string",
    "as_symbol",
    "as_integer",
    "as_string",
]
