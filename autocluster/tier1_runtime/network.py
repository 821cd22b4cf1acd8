"""
autocluster.tier1_runtime.network
──────────────────────────────────
Host network introspection: the IPv4 address of a named interface and
the local hostname, either from the OS or from the node identifier the
process has already been assigned.

Interface and address order follow what the OS reports; the first match
wins. A device carrying several IPv4 addresses resolves to the first one,
which may differ between platforms.

Minimal stack: psutil (interface table) + socket (hostname)
"""
from __future__ import annotations

import socket
from dataclasses import dataclass, field
from typing import Iterable

import psutil

from autocluster.tier0_core.config import AutoclusterConfig, get_config
from autocluster.tier0_core.errors import PreconditionError


# ── Domain model ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class InterfaceAddress:
    family: int
    address: str
    netmask: str | None = None
    broadcast: str | None = None
    ptp: str | None = None

    @property
    def is_ipv4(self) -> bool:
        return self.family == socket.AF_INET


@dataclass(frozen=True)
class NetworkInterface:
    name: str
    addresses: tuple[InterfaceAddress, ...] = field(default_factory=tuple)

    def first_ipv4(self) -> str | None:
        for addr in self.addresses:
            if addr.is_ipv4:
                return addr.address
        return None


# ── Interface table ──────────────────────────────────────────────────────────

def list_interfaces() -> list[NetworkInterface]:
    """Return the host interface table in OS enumeration order."""
    return [
        NetworkInterface(
            name=name,
            addresses=tuple(
                InterfaceAddress(
                    family=int(snic.family),
                    address=snic.address,
                    netmask=snic.netmask,
                    broadcast=snic.broadcast,
                    ptp=snic.ptp,
                )
                for snic in snics
            ),
        )
        for name, snics in psutil.net_if_addrs().items()
    ]


def nic_ipv4(
    device: str,
    interfaces: Iterable[NetworkInterface] | None = None,
) -> str | None:
    """
    Return the first IPv4 address of interface ``device`` as a dotted quad,
    or None if the device is absent or has no IPv4 address.
    """
    if interfaces is None:
        interfaces = list_interfaces()
    for iface in interfaces:
        if iface.name == device:
            return iface.first_ipv4()
    return None


# ── Hostname ─────────────────────────────────────────────────────────────────

def node_hostname(
    from_identifier: bool = False,
    config: AutoclusterConfig | None = None,
) -> str:
    """
    Return the hostname for this node.

    With ``from_identifier`` the host part of the configured node
    identifier (``rabbit@host`` → ``host``) is returned instead of the OS
    hostname. An identifier without ``@`` raises PreconditionError.
    """
    if not from_identifier:
        return socket.gethostname()

    identifier = (config or get_config()).node_name
    _, sep, host = identifier.partition("@")
    if not sep:
        raise PreconditionError(
            user_message=f"Node identifier {identifier!r} has no host part.",
            key="RABBITMQ_NODENAME",
            node_name=identifier,
        )
    return host


__all__ = [
    "InterfaceAddress",
    "NetworkInterface",
    "list_interfaces",
    "nic_ipv4",
    "node_hostname",
]
