"""Tests for Docker client helpers."""

from types import SimpleNamespace

from omni_agent.docker_client import _parse_env, _published_ports, cpu_percent


class TestCpuPercent:
    def test_usage(self):
        stats = {
            "cpu_stats": {
                "cpu_usage": {"total_usage": 300},
                "system_cpu_usage": 2000,
                "online_cpus": 2,
            },
            "precpu_stats": {"cpu_usage": {"total_usage": 100}, "system_cpu_usage": 1000},
        }
        assert cpu_percent(stats) == 40.0

    def test_missing_previous_sample(self):
        stats = {
            "cpu_stats": {"cpu_usage": {"total_usage": 100}, "system_cpu_usage": 1000},
            "precpu_stats": {},
        }
        assert cpu_percent(stats) == 10.0

    def test_no_delta(self):
        assert cpu_percent({}) == 0.0


class TestParseEnv:
    def test_pairs(self):
        assert _parse_env(["A=1", "B=x=y", "EMPTY="]) == {"A": "1", "B": "x=y", "EMPTY": ""}

    def test_none(self):
        assert _parse_env(None) == {}


class TestPublishedPorts:
    def test_bindings(self):
        container = SimpleNamespace(
            attrs={
                "NetworkSettings": {
                    "Ports": {
                        "80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}],
                        "443/tcp": None,
                    }
                }
            }
        )
        assert _published_ports(container) == ["0.0.0.0:8080->80/tcp", "443/tcp"]

    def test_no_network_settings(self):
        assert _published_ports(SimpleNamespace(attrs={})) == []
