"""
autocluster test configuration.

Tests never read the real node environment: every AUTOCLUSTER_* and
RABBITMQ_* variable is cleared and the config cache reset around each
test. Interface tables are built by hand, so no test depends on the
host's NICs.
"""
from __future__ import annotations

import os
import socket

import pytest

os.environ.setdefault("AUTOCLUSTER_LOG_LEVEL", "DEBUG")

_ENV_PREFIXES = ("AUTOCLUSTER_", "RABBITMQ_")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Strip node env vars and reset the cached config between tests."""
    from autocluster.tier0_core.config import _reset_config

    for key in list(os.environ):
        if key.upper().startswith(_ENV_PREFIXES) and key != "AUTOCLUSTER_LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def make_config():
    """Return a factory for AutoclusterConfig built from field names."""
    from autocluster.tier0_core.config import AutoclusterConfig

    def _make(**fields):
        return AutoclusterConfig(**fields)

    return _make


@pytest.fixture
def interface_table():
    """A fixed interface table: loopback, eth0 (link + IPv6 + IPv4), eth1 without IPv4."""
    from autocluster.tier1_runtime.network import InterfaceAddress, NetworkInterface

    return [
        NetworkInterface(
            name="lo",
            addresses=(InterfaceAddress(socket.AF_INET, "127.0.0.1", "255.0.0.0"),),
        ),
        NetworkInterface(
            name="eth0",
            addresses=(
                InterfaceAddress(socket.AF_INET6, "fe80::1", "ffff:ffff:ffff:ffff::"),
                InterfaceAddress(socket.AF_INET, "10.0.0.5", "255.255.255.0", "10.0.0.255"),
                InterfaceAddress(socket.AF_INET, "10.0.0.6", "255.255.255.0", "10.0.0.255"),
            ),
        ),
        NetworkInterface(
            name="eth1",
            addresses=(InterfaceAddress(socket.AF_INET6, "fe80::2"),),
        ),
    ]
