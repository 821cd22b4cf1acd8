"""
autocluster
───────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from autocluster.tier0_core.logging import get_logger, bind_context, clear_context
from autocluster.tier0_core.errors import (
    AutoclusterError,
    ConfigurationError,
    ValidationError,
    InvalidIntegerError,
    UnsupportedTypeError,
    NotFoundError,
    PreconditionError,
)
from autocluster.tier0_core.config import get_config, load_config, AutoclusterConfig
from autocluster.tier0_core.result import Outcome, Status
from autocluster.tier0_core.coerce import Symbol, as_symbol, as_integer, as_string

from autocluster.tier1_runtime.network import (
    InterfaceAddress,
    NetworkInterface,
    list_interfaces,
    nic_ipv4,
    node_hostname,
)
from autocluster.tier1_runtime.ports import parse_port
from autocluster.tier1_runtime.proplist import as_proplist

from autocluster.tier2_cluster.naming import node_name, local_node_name
from autocluster.tier2_cluster.discovery import Backend, backend_module

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger", "bind_context", "clear_context",
    # errors
    "AutoclusterError", "ConfigurationError", "ValidationError",
    "InvalidIntegerError", "UnsupportedTypeError", "NotFoundError",
    "PreconditionError",
    # config
    "get_config", "load_config", "AutoclusterConfig",
    # result
    "Outcome", "Status",
    # coerce
    "Symbol", "as_symbol", "as_integer", "as_string",
    # network
    "InterfaceAddress", "NetworkInterface", "list_interfaces",
    "nic_ipv4", "node_hostname",
    # ports
    "parse_port",
    # proplist
    "as_proplist",
    # naming
    "node_name", "local_node_name",
    # discovery
    "Backend", "backend_module",
]
