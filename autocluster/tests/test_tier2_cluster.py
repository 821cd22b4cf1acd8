"""Tests for tier2_cluster modules."""
from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from autocluster.tier0_core.coerce import Symbol
from autocluster.tier0_core.errors import (
    ConfigurationError,
    NotFoundError,
    UnsupportedTypeError,
    ValidationError,
)
from autocluster.tier2_cluster.discovery import (
    BACKEND_MODULES,
    Backend,
    backend_module,
    select_backend,
)
from autocluster.tier2_cluster.naming import (
    local_node_name,
    node_name,
    node_name_parse,
    node_prefix,
)


# ── naming ─────────────────────────────────────────────────────────────────

class TestNodeName:
    @pytest.mark.parametrize(
        "value",
        ["rabbit@db", "hare@db.internal.example.com", b"rabbit@10.0.0.5", Symbol("x@y")],
    )
    def test_full_identifier_returned_unchanged(self, value, make_config):
        result = node_name(value, make_config(node_name="other@ignored"))
        assert isinstance(result, Symbol)
        expected = value.decode() if isinstance(value, bytes) else str(value)
        assert result == expected

    def test_short_name_from_fqdn(self, make_config):
        config = make_config(node_name="rabbit@ignored", longname=False)
        assert node_name("db.internal.example.com", config) == "rabbit@db"

    def test_result_is_interned_symbol(self, make_config):
        config = make_config(node_name="rabbit")
        assert node_name("db.example.com", config) is Symbol("rabbit@db")

    def test_long_name_keeps_fqdn(self, make_config):
        config = make_config(node_name="rabbit", longname=True)
        assert node_name("db.internal.example.com", config) == "rabbit@db.internal.example.com"

    def test_ip_address_kept(self, make_config):
        config = make_config(node_name="rabbit", longname=False)
        assert node_name("10.0.0.5", config) == "rabbit@10.0.0.5"

    def test_bytes_and_symbol_input(self, make_config):
        config = make_config(node_name="rabbit")
        assert node_name(b"mq-1.local", config) == "rabbit@mq-1"
        assert node_name(Symbol("mq-2"), config) == "rabbit@mq-2"

    def test_uses_process_config_by_default(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_NODENAME", "hare@elsewhere")
        assert node_name("mq.example.com") == "hare@mq"

    def test_unsupported_input_raises(self, make_config):
        with pytest.raises(UnsupportedTypeError):
            node_name(12345, make_config())

    def test_undecodable_bytes_raise(self, make_config):
        with pytest.raises(UnsupportedTypeError):
            node_name(b"db\xff.example.com", make_config(node_name="rabbit"))


class TestNodeNameParse:
    @pytest.mark.parametrize("address", ["10.0.0.5", "192.168.1.254", "0.0.0.0"])
    @pytest.mark.parametrize("longname", [True, False])
    def test_dotted_quad_unchanged(self, address, longname, make_config):
        assert node_name_parse(address, make_config(longname=longname)) == address

    def test_not_quite_an_address_is_a_hostname(self, make_config):
        config = make_config(longname=False)
        assert node_name_parse("10.0.0", config) == "10"
        assert node_name_parse("300.1.1.1", config) == "300"

    @pytest.mark.parametrize("value", ["a.b.c", "db.internal.example.com", "single"])
    def test_long_name_unchanged(self, value, make_config):
        assert node_name_parse(value, make_config(longname=True)) == value

    def test_short_name_takes_leftmost_label(self, make_config):
        assert node_name_parse("a.b.c", make_config(longname=False)) == "a"

    def test_single_label_unchanged(self, make_config):
        config = make_config(longname=False)
        assert node_name_parse("h", config) == "h"
        assert node_name_parse("h.", config) == "h."

    def test_no_labels_raises(self, make_config):
        with pytest.raises(ValidationError):
            node_name_parse("...", make_config(longname=False))


class TestNodePrefix:
    def test_drops_host_part(self, make_config):
        assert node_prefix(make_config(node_name="rabbit@ignored")) == "rabbit"

    def test_plain_name(self, make_config):
        assert node_prefix(make_config(node_name="hare")) == "hare"

    def test_first_segment_only(self, make_config):
        assert node_prefix(make_config(node_name="hare@a@b")) == "hare"

    @pytest.mark.parametrize("configured", ["", "@host", "@"])
    def test_missing_name_is_configuration_error(self, configured, make_config):
        with pytest.raises(ConfigurationError) as info:
            node_prefix(make_config(node_name=configured))
        assert "RABBITMQ_NODENAME" in info.value.user_message
        assert info.value.metadata["key"] == "RABBITMQ_NODENAME"


class TestLocalNodeName:
    def test_from_os_hostname(self, monkeypatch, make_config):
        import autocluster.tier1_runtime.network as network

        monkeypatch.setattr(network.socket, "gethostname", lambda: "mq-1.example.com")
        assert local_node_name(make_config(node_name="rabbit")) == "rabbit@mq-1"

    def test_from_nic(self, interface_table, make_config):
        config = make_config(node_name="rabbit", node_nic="eth0")
        assert local_node_name(config, interface_table) == "rabbit@10.0.0.5"

    def test_missing_nic_is_fatal(self, interface_table, make_config):
        config = make_config(node_name="rabbit", node_nic="eth1")
        with pytest.raises(NotFoundError) as info:
            local_node_name(config, interface_table)
        assert info.value.metadata["key"] == "AUTOCLUSTER_NODE_NIC"


# ── discovery ──────────────────────────────────────────────────────────────

class TestBackendSelection:
    @pytest.mark.parametrize(
        "symbol,module",
        [
            ("aws", "autocluster_aws"),
            ("consul", "autocluster_consul"),
            ("dns", "autocluster_dns"),
            ("etcd", "autocluster_etcd"),
            ("k8s", "autocluster_k8s"),
        ],
    )
    def test_known_backends(self, symbol, module, make_config):
        assert backend_module(make_config(backend=symbol)) == module
        assert Backend(symbol).module == module

    def test_table_is_closed(self):
        assert set(BACKEND_MODULES) == set(Backend)
        with pytest.raises(TypeError):
            BACKEND_MODULES["zookeeper"] = "autocluster_zk"  # type: ignore[index]

    def test_unconfigured_is_none(self, make_config):
        assert backend_module(make_config()) is None
        assert select_backend(None).ok

    def test_unknown_backend_is_none_and_logged(self, monkeypatch, make_config):
        import autocluster.tier2_cluster.discovery as discovery

        fake = Mock()
        monkeypatch.setattr(discovery, "logger", fake)
        assert backend_module(make_config(backend="zookeeper")) is None
        fake.warning.assert_called_once()

    def test_select_backend_outcomes(self):
        assert select_backend(Symbol("etcd")).value is Backend.ETCD
        assert select_backend(Backend.K8S).value is Backend.K8S
        unknown = select_backend("zookeeper")
        assert unknown.degraded and unknown.value is None
        assert select_backend(3.14).degraded

    def test_reads_process_config(self, monkeypatch):
        monkeypatch.setenv("AUTOCLUSTER_TYPE", "k8s")
        assert backend_module() == "autocluster_k8s"


# ── startup report ─────────────────────────────────────────────────────────

class TestMain:
    def test_prints_identity(self, monkeypatch, capsys):
        import autocluster.tier1_runtime.network as network
        from autocluster.__main__ import main

        monkeypatch.setattr(network.socket, "gethostname", lambda: "mq-1.example.com")
        monkeypatch.setenv("RABBITMQ_NODENAME", "rabbit@ignored")
        monkeypatch.setenv("AUTOCLUSTER_TYPE", "consul")
        monkeypatch.setenv("AUTOCLUSTER_PORT", "tcp://172.17.0.2:8500")
        monkeypatch.setenv("AUTOCLUSTER_TAGS", '{"az": "b"}')

        assert main() == 0
        report = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert report == {
            "node_name": "rabbit@mq-1",
            "backend": "consul",
            "backend_module": "autocluster_consul",
            "backend_port": 8500,
            "tags": {"az": "b"},
        }

    def test_failure_names_setting(self, monkeypatch, capsys):
        from autocluster.__main__ import main

        monkeypatch.setenv("AUTOCLUSTER_NODE_NIC", "does-not-exist0")
        monkeypatch.setattr(
            "autocluster.tier1_runtime.network.list_interfaces", lambda: []
        )
        assert main() == 1
        assert "AUTOCLUSTER_NODE_NIC" in capsys.readouterr().err
