"""
autocluster.tier2_cluster.naming
─────────────────────────────────
Node identity resolution. Turns a host hint (hostname, FQDN, IP address
or a full ``name@host`` identifier) into the identifier this node uses to
join the cluster:

    node_name("db.internal.example.com")   # → Symbol('rabbit@db')
    node_name("10.0.0.5")                  # → Symbol('rabbit@10.0.0.5')
    node_name("rabbit@node-1")             # → Symbol('rabbit@node-1')

The prefix comes from RABBITMQ_NODENAME. The host part keeps IP
addresses as they are, keeps the full name in long-name mode
(RABBITMQ_USE_LONGNAME), and otherwise keeps only the leftmost label.

Every node in a cluster must agree on these rules. A wrong name means a
split cluster or a failed join, so anything that cannot be resolved
raises instead of guessing.
"""
from __future__ import annotations

import ipaddress
from typing import Any, Iterable

from autocluster.tier0_core.coerce import Symbol, as_symbol, coerce_string
from autocluster.tier0_core.config import AutoclusterConfig, get_config
from autocluster.tier0_core.errors import (
    ConfigurationError,
    NotFoundError,
    UnsupportedTypeError,
    ValidationError,
)
from autocluster.tier1_runtime.network import NetworkInterface, nic_ipv4, node_hostname


def _is_ipv4(text: str) -> bool:
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        return False
    return True


def node_name(value: Any, config: AutoclusterConfig | None = None) -> Symbol:
    """Return the cluster node identifier for ``value``."""
    outcome = coerce_string(value)
    if not isinstance(value, (str, bytes)) or outcome.degraded:
        raise UnsupportedTypeError(
            user_message=f"Cannot derive a node name from {value!r}.",
            value=repr(value),
        )
    text = outcome.value
    if "@" in text:
        return as_symbol(text)
    config = config or get_config()
    return Symbol(f"{node_prefix(config)}@{node_name_parse(text, config)}")


def node_name_parse(value: str, config: AutoclusterConfig | None = None) -> str:
    """
    Return the host part for ``value``: IPv4 addresses unchanged, the full
    name in long-name mode, otherwise the leftmost dot-delimited label.
    """
    if _is_ipv4(value):
        return value
    if (config or get_config()).longname:
        return value

    labels = [label for label in value.split(".") if label]
    if not labels:
        raise ValidationError(
            "invalid_hostname",
            f"Cannot derive a host name from {value!r}.",
            fields={"hostname": "no labels"},
        )
    if len(labels) == 1:
        return value
    return labels[0]


def node_prefix(config: AutoclusterConfig | None = None) -> str:
    """Return the local part of RABBITMQ_NODENAME (``rabbit@x`` → ``rabbit``)."""
    configured = (config or get_config()).node_name
    prefix = (configured or "").split("@", 1)[0]
    if not prefix:
        raise ConfigurationError(
            "missing_node_name",
            "RABBITMQ_NODENAME is not set or has no name part.",
            key="RABBITMQ_NODENAME",
            node_name=configured,
        )
    return prefix


def local_node_name(
    config: AutoclusterConfig | None = None,
    interfaces: Iterable[NetworkInterface] | None = None,
) -> Symbol:
    """
    Return the identifier for this process.

    The host part is the IPv4 address of AUTOCLUSTER_NODE_NIC when that is
    set, otherwise the OS hostname.
    """
    config = config or get_config()
    if config.node_nic:
        address = nic_ipv4(config.node_nic, interfaces)
        if address is None:
            raise NotFoundError(
                "nic_address_not_found",
                f"No IPv4 address found on interface {config.node_nic!r} "
                "(AUTOCLUSTER_NODE_NIC).",
                key="AUTOCLUSTER_NODE_NIC",
                device=config.node_nic,
            )
        return node_name(address, config)
    return node_name(node_hostname(False), config)


__all__ = ["node_name", "node_name_parse", "node_prefix", "local_node_name"]
