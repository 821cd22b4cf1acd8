"""
autocluster.tier2_cluster.discovery
────────────────────────────────────
Discovery backend selection. Maps the configured backend symbol onto the
module implementing that discovery protocol:

  - aws     → autocluster_aws     (EC2 tags / autoscaling groups)
  - consul  → autocluster_consul  (Consul service catalog)
  - dns     → autocluster_dns     (A records of a seed hostname)
  - etcd    → autocluster_etcd    (etcd key space)
  - k8s     → autocluster_k8s     (Kubernetes endpoints API)

The set is closed. Anything else, including no configuration at all,
means discovery is disabled and selects None.

Select via: AUTOCLUSTER_TYPE=aws|consul|dns|etcd|k8s
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from autocluster.tier0_core.coerce import coerce_string
from autocluster.tier0_core.config import AutoclusterConfig, get_config
from autocluster.tier0_core.logging import get_logger
from autocluster.tier0_core.result import Outcome, degraded, ok

logger = get_logger(__name__)


class Backend(str, Enum):
    AWS = "aws"
    CONSUL = "consul"
    DNS = "dns"
    ETCD = "etcd"
    K8S = "k8s"

    @property
    def module(self) -> str:
        return BACKEND_MODULES[self]


BACKEND_MODULES: Mapping[Backend, str] = MappingProxyType({
    Backend.AWS: "autocluster_aws",
    Backend.CONSUL: "autocluster_consul",
    Backend.DNS: "autocluster_dns",
    Backend.ETCD: "autocluster_etcd",
    Backend.K8S: "autocluster_k8s",
})


def select_backend(value: Any) -> Outcome[Backend | None]:
    """
    Resolve a backend symbol. Unset selects None; an unknown symbol
    selects None with a degraded outcome.
    """
    if isinstance(value, Backend):
        return ok(value)
    text = coerce_string(value)
    if text.degraded:
        return degraded(None, "unknown_backend", value=repr(value))
    if not text.value:
        return ok(None)
    try:
        return ok(Backend(text.value))
    except ValueError:
        return degraded(None, "unknown_backend", value=text.value)


def backend_module(config: AutoclusterConfig | None = None) -> str | None:
    """Return the module identifier for the configured backend, or None."""
    outcome = select_backend((config or get_config()).backend)
    if outcome.degraded:
        logger.warning(
            "discovery.unknown_backend",
            key="AUTOCLUSTER_TYPE",
            allowed=[b.value for b in Backend],
            **outcome.detail,
        )
    if outcome.value is None:
        return None
    return outcome.value.module


__all__ = ["Backend", "BACKEND_MODULES", "select_backend", "backend_module"]
