"""
Tests for client and application configuration, and the configuration loader.
"""

import json
from pathlib import Path

import pytest

from tcplink.core.exceptions import ConfigError
from tcplink.infrastructure.clients.tcp import ClientConfig, DEFAULT_MAX_RECONNECT_ATTEMPTS
from tcplink.infrastructure.config.loader import ConfigLoader
from tcplink.infrastructure.config.models import (
    ApplicationConfig, LoggingConfig, ServiceConfig
)


class TestClientConfig:
    """Test cases for ClientConfig."""

    def test_defaults(self) -> None:
        config = ClientConfig()

        assert config.auto_reconnect is True
        assert config.max_reconnect_attempts == DEFAULT_MAX_RECONNECT_ATTEMPTS
        assert config.receive_buffer_size == 1024
        assert config.retry_interval == 1.0
        assert config.close_on_receive_error is False
        assert config.validate() is True

    @pytest.mark.parametrize("changes", [
        {"port": 0},
        {"port": 65536},
        {"port": True},
        {"host": ""},
        {"max_reconnect_attempts": -1},
        {"receive_buffer_size": 0},
        {"retry_interval": -0.5},
        {"connect_timeout": -1},
    ])
    def test_validate_rejects(self, changes: dict) -> None:
        config = ClientConfig(**changes)

        with pytest.raises(ConfigError):
            config.validate()

    def test_total_attempts(self) -> None:
        assert ClientConfig(max_reconnect_attempts=0).total_attempts == 1
        assert ClientConfig(max_reconnect_attempts=3).total_attempts == 3

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ClientConfig.from_dict({
            "host": "10.0.0.5",
            "port": 7000,
            "auto_reconnect": False,
            "unknown": "value",
        })

        assert config.host == "10.0.0.5"
        assert config.port == 7000
        assert config.auto_reconnect is False

    def test_to_dict(self) -> None:
        data = ClientConfig(host="example.com", port=1234).to_dict()

        assert data["host"] == "example.com"
        assert data["port"] == 1234
        assert data["receive_buffer_size"] == 1024


class TestApplicationConfig:
    """Test cases for ApplicationConfig."""

    def test_defaults(self) -> None:
        config = ApplicationConfig()

        assert config.name == "tcplink"
        assert isinstance(config.client, ClientConfig)
        assert config.service.poll_interval == 0.01
        assert config.logging.file_enabled is False

    def test_from_dict(self) -> None:
        config = ApplicationConfig.from_dict({
            "client": {"host": "127.0.0.1", "port": 9100, "max_reconnect_attempts": 3},
            "service": {"poll_interval": 0.05, "connect_on_start": False},
            "logging": {"level": "DEBUG"},
        })

        assert config.client.port == 9100
        assert config.client.max_reconnect_attempts == 3
        assert config.service.connect_on_start is False
        assert config.logging.level == "DEBUG"

    def test_to_dict_round_trip(self) -> None:
        config = ApplicationConfig(client=ClientConfig(port=9200))

        restored = ApplicationConfig.from_dict(config.to_dict())

        assert restored.client.port == 9200
        assert restored.to_dict() == config.to_dict()

    def test_invalid_client_config(self) -> None:
        with pytest.raises(ConfigError):
            ApplicationConfig(client=ClientConfig(port=-1))

    def test_invalid_poll_interval(self) -> None:
        with pytest.raises(ConfigError):
            ApplicationConfig(service=ServiceConfig(poll_interval=0))

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigError):
            ApplicationConfig(logging=LoggingConfig(level="LOUD"))


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("HOST", "PORT", "AUTO_RECONNECT", "MAX_RECONNECT_ATTEMPTS",
                    "RECEIVE_BUFFER_SIZE", "RETRY_INTERVAL", "POLL_INTERVAL",
                    "LOG_LEVEL", "LOG_DIR"):
            monkeypatch.delenv(f"TCPLINK_{var}", raising=False)

    def test_load_defaults(self) -> None:
        config = ConfigLoader().load_config()

        assert config.client.host == "localhost"
        assert config.config_file_path is None

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "client:\n"
            "  host: 192.168.1.20\n"
            "  port: 5555\n"
            "  auto_reconnect: false\n"
            "service:\n"
            "  poll_interval: 0.02\n",
            encoding="utf-8",
        )

        config = ConfigLoader().load_config(str(path))

        assert config.client.host == "192.168.1.20"
        assert config.client.port == 5555
        assert config.client.auto_reconnect is False
        assert config.service.poll_interval == 0.02
        assert config.config_file_path == str(path)

    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"client": {"port": 6000}}), encoding="utf-8")

        config = ConfigLoader().load_config(str(path))

        assert config.client.port == 6000

    def test_environment_overrides_file(self, tmp_path: Path,
                                        monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("client:\n  port: 5555\n", encoding="utf-8")
        monkeypatch.setenv("TCPLINK_PORT", "7777")
        monkeypatch.setenv("TCPLINK_AUTO_RECONNECT", "no")
        monkeypatch.setenv("TCPLINK_LOG_LEVEL", "WARNING")

        config = ConfigLoader().load_config(str(path))

        assert config.client.port == 7777
        assert config.client.auto_reconnect is False
        assert config.logging.level == "WARNING"

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TCPLINK_PORT", "not-a-port")

        with pytest.raises(ConfigError):
            ConfigLoader().load_config()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_config(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "config.ini"
        path.write_text("[client]\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader().load_config(str(path))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("client: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader().load_config(str(path))

    def test_save_and_reload(self, tmp_path: Path) -> None:
        loader = ConfigLoader()
        config = ApplicationConfig(client=ClientConfig(host="127.0.0.1", port=4321))
        yaml_path = tmp_path / "saved.yaml"
        json_path = tmp_path / "saved.json"

        loader.save_config(config, str(yaml_path))
        loader.save_config(config, str(json_path), format="json")

        assert loader.load_config(str(yaml_path)).client.port == 4321
        assert loader.load_config(str(json_path)).client.host == "127.0.0.1"

    def test_save_unsupported_format(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            ConfigLoader().save_config(ApplicationConfig(), str(tmp_path / "x.toml"), format="toml")
