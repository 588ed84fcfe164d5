"""
Configuration models and data structures.

This module defines the configuration models used throughout the application,
providing type safety and validation for configuration values.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from ...core.exceptions import ConfigError
from ..clients.tcp.config import ClientConfig

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False


@dataclass
class ServiceConfig:
    """Polling host adapter configuration."""
    poll_interval: float = 0.01
    connect_on_start: bool = True


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    name: str = "tcplink"
    client: ClientConfig = field(default_factory=ClientConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.client.validate()
        self._validate_service()
        self._validate_logging()

    def _validate_service(self) -> None:
        if self.service.poll_interval <= 0:
            raise ConfigError(
                f"Poll interval must be positive, got {self.service.poll_interval}")

    def _validate_logging(self) -> None:
        if self.logging.level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.logging.level}")
        if self.logging.backup_count < 0:
            raise ConfigError(
                f"Backup count cannot be negative, got {self.logging.backup_count}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "name": self.name,
            "client": self.client.to_dict(),
            "service": {
                "poll_interval": self.service.poll_interval,
                "connect_on_start": self.service.connect_on_start,
            },
            "logging": {
                "level": self.logging.level,
                "log_directory": self.logging.log_directory,
                "max_file_size": self.logging.max_file_size,
                "backup_count": self.logging.backup_count,
                "console_enabled": self.logging.console_enabled,
                "file_enabled": self.logging.file_enabled,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """
        Create configuration from dictionary.

        Unknown keys are ignored so older configuration files keep loading.
        """
        return cls(
            name=data.get("name", "tcplink"),
            client=ClientConfig.from_dict(data.get("client", {})),
            service=_build(ServiceConfig, data.get("service", {})),
            logging=_build(LoggingConfig, data.get("logging", {})),
            config_file_path=data.get("config_file_path"),
        )


def _build(model: Any, data: Dict[str, Any]) -> Any:
    known = {f.name for f in fields(model)}
    return model(**{k: v for k, v in data.items() if k in known})
