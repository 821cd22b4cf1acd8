"""
autocluster.tier1_runtime.proplist
───────────────────────────────────
Decodes key/value lists handed over by the environment, e.g.

    AUTOCLUSTER_TAGS='{"region": "us-east-1", "service": "rabbitmq"}'

into ``[("region", "us-east-1"), ("service", "rabbitmq")]``. These values
are advisory: a malformed list is logged and replaced with ``[]`` so it
never blocks node startup.
"""
from __future__ import annotations

import json
from typing import Any

from autocluster.tier0_core.coerce import coerce_string
from autocluster.tier0_core.logging import get_logger
from autocluster.tier0_core.result import Outcome, degraded, ok

logger = get_logger(__name__)

Proplist = list[tuple[str, str]]


def _tag_value(value: Any) -> str | None:
    # booleans and containers have no tag form
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (bool, list, dict)):
        return None
    outcome = coerce_string(value)
    return None if outcome.degraded else outcome.value


def _pairs_from_object(obj: dict) -> Proplist | None:
    pairs: Proplist = []
    for key, value in obj.items():
        text = _tag_value(value)
        if text is None:
            return None
        pairs.append((str(key), text))
    return pairs


def decode_proplist(value: Any) -> Outcome[Proplist]:
    """Decode ``value`` into a list of string pairs, degrading to ``[]``."""
    if isinstance(value, list) and value and isinstance(value[0], tuple):
        return ok(value)
    if value is None or (isinstance(value, (str, bytes, list)) and len(value) == 0):
        return ok([])
    if isinstance(value, (str, bytes)):
        try:
            decoded = json.loads(value)
        except (ValueError, RecursionError) as exc:
            return degraded([], "json_decode_error", value=value, error=str(exc))
        if not isinstance(decoded, dict):
            return degraded([], "unexpected_json", value=value, json_type=type(decoded).__name__)
        pairs = _pairs_from_object(decoded)
        if pairs is None:
            return degraded([], "unexpected_json", value=value, json_type="non_scalar_value")
        return ok(pairs)
    return degraded([], "unsupported_type", value=repr(value), type=type(value).__name__)


def as_proplist(value: Any) -> Proplist:
    """
    Return ``value`` as a list of ``(key, value)`` string pairs.

    Usage:
        as_proplist('{"az": "b"}')     # → [("az", "b")]
        as_proplist([("az", "b")])     # → [("az", "b")] (unchanged)
        as_proplist("{not json")       # → [] and an error is logged
    """
    outcome = decode_proplist(value)
    if outcome.degraded:
        logger.error(f"proplist.{outcome.reason}", **outcome.detail)
    return outcome.value


__all__ = ["Proplist", "decode_proplist", "as_proplist"]
