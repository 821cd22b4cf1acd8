"""autocluster startup report.

Resolves this node's cluster identity and discovery backend from the
environment and prints them as JSON:

    $ RABBITMQ_NODENAME=rabbit AUTOCLUSTER_TYPE=consul python -m autocluster
    {"node_name": "rabbit@db", "backend": "consul", ...}

Exits 1 with the offending setting named on stderr if the identity
cannot be resolved.
"""

from __future__ import annotations

import json
import sys

from autocluster.tier0_core.config import get_config
from autocluster.tier0_core.errors import AutoclusterError
from autocluster.tier0_core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from autocluster.tier2_cluster.discovery import backend_module
from autocluster.tier2_cluster.naming import local_node_name

log = get_logger("autocluster")


def report() -> dict:
    config = get_config()
    configure_logging(config)
    node = local_node_name(config)
    module = backend_module(config)
    bind_context(node=str(node), backend=config.backend)
    log.info("identity.resolved", backend_module=module)
    return {
        "node_name": str(node),
        "backend": config.backend,
        "backend_module": module,
        "backend_port": config.backend_port,
        "tags": dict(config.tags),
    }


def main() -> int:
    try:
        result = report()
    except AutoclusterError as exc:
        log.error("identity.failed", code=exc.code, **exc.metadata)
        print(f"autocluster: {exc.user_message}", file=sys.stderr)
        return 1
    finally:
        clear_context()
    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
