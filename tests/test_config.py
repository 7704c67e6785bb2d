"""Tests for agent configuration loading."""

import logging
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient
from pydantic import ValidationError

from omni_agent import state
from omni_agent.api import app
from omni_agent.config import configure_logging, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CONFIG_FILE", "HOST", "PORT", "OMNI_CPI_FILE"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.host == "0.0.0.0"
        assert config.port == 8081
        assert config.cpi.max_concurrent_commands == 4
        assert Path(config.cpi.path).parent == Path("CPIs")
        assert config.docker.enabled is True

    def test_reads_yaml(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text(
            "port: 9000\ncpi:\n  path: /etc/omni/cpi.json\n  max_concurrent_commands: 2\n"
            "docker:\n  enabled: false\n"
        )
        config = load_config(str(config_file))
        assert config.port == 9000
        assert config.cpi.path == "/etc/omni/cpi.json"
        assert config.cpi.max_concurrent_commands == 2
        assert config.docker.enabled is False

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("")
        assert load_config(str(config_file)).port == 8081

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yml"))

    def test_config_file_env_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "missing.yml"))
        with pytest.raises(FileNotFoundError):
            load_config()

    def test_config_file_env(self, tmp_path, monkeypatch):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("host: 127.0.0.1\n")
        monkeypatch.setenv("CONFIG_FILE", str(config_file))
        assert load_config().host == "127.0.0.1"

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("port: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(str(config_file))

    def test_invalid_schema(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("cpi:\n  max_concurrent_commands: 0\n")
        with pytest.raises(ValidationError):
            load_config(str(config_file))

    def test_env_overrides(self, tmp_path, monkeypatch):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("host: 127.0.0.1\nport: 9000\n")
        monkeypatch.setenv("HOST", "10.0.0.1")
        monkeypatch.setenv("PORT", "9100")
        monkeypatch.setenv("OMNI_CPI_FILE", "/tmp/custom.json")
        config = load_config(str(config_file))
        assert config.host == "10.0.0.1"
        assert config.port == 9100
        assert config.cpi.path == "/tmp/custom.json"


@pytest.fixture
def restore_log_levels():
    loggers = [logging.getLogger(), logging.getLogger("omni_agent")]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


class TestLogLevel:
    def test_configure_logging(self, restore_log_levels):
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("omni_agent").isEnabledFor(logging.DEBUG)
        assert logging.getLogger("omni_agent.cpi.orchestrator").isEnabledFor(logging.DEBUG)

    def test_log_level_from_yaml(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("log_level: WARNING\n")
        assert load_config(str(config_file)).log_level == "WARNING"

    def test_unknown_log_level_rejected(self, tmp_path):
        config_file = tmp_path / "agent.yml"
        config_file.write_text("log_level: LOUD\n")
        with pytest.raises(ValidationError):
            load_config(str(config_file))

    def test_startup_applies_log_level(self, tmp_path, monkeypatch, restore_log_levels):
        config_file = tmp_path / "agent.yml"
        config_file.write_text(
            yaml.safe_dump({"log_level": "ERROR", "docker": {"enabled": False}})
        )
        monkeypatch.setenv("CONFIG_FILE", str(config_file))

        with TestClient(app):
            assert state.get_config().log_level == "ERROR"
            assert logging.getLogger("omni_agent").level == logging.ERROR
            assert not logging.getLogger("omni_agent.api").isEnabledFor(logging.INFO)
