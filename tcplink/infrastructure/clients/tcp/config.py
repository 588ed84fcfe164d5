from dataclasses import dataclass, fields
from typing import Dict, Any

from ....core.exceptions import ConfigError


# Effectively unbounded, matches the attempt budget of the original component
DEFAULT_MAX_RECONNECT_ATTEMPTS = 1_000_000


@dataclass
class ClientConfig:
    """TCP client configuration"""
    # Target endpoint
    host: str = "localhost"
    port: int = 8080

    # Reconnect settings
    auto_reconnect: bool = True                 # Reconnect after the server closes the connection
    max_reconnect_attempts: int = DEFAULT_MAX_RECONNECT_ATTEMPTS  # 0 means a single attempt
    retry_interval: float = 1.0                 # Wait between connect attempts (seconds)
    connect_timeout: float = 1.0                # Wait for a pending connect to complete (seconds)

    # Receive settings
    receive_buffer_size: int = 1024             # Max bytes read per poll
    close_on_receive_error: bool = False        # Treat receive errors like remote closure

    @property
    def total_attempts(self) -> int:
        """Number of connect attempts a single connect call may make."""
        return max(1, self.max_reconnect_attempts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "host": self.host,
            "port": self.port,
            "auto_reconnect": self.auto_reconnect,
            "max_reconnect_attempts": self.max_reconnect_attempts,
            "retry_interval": self.retry_interval,
            "connect_timeout": self.connect_timeout,
            "receive_buffer_size": self.receive_buffer_size,
            "close_on_receive_error": self.close_on_receive_error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Create configuration from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def validate(self) -> bool:
        """Validate configuration

        Returns:
            True if configuration is valid

        Raises:
            ConfigError: If configuration is invalid
        """
        if not self.host:
            raise ConfigError("Host cannot be empty")

        if isinstance(self.port, bool) or not isinstance(self.port, int) \
                or self.port <= 0 or self.port > 65535:
            raise ConfigError(f"Invalid port: {self.port}")

        if self.max_reconnect_attempts < 0:
            raise ConfigError(
                f"Invalid max reconnect attempts: {self.max_reconnect_attempts}")

        if self.receive_buffer_size <= 0:
            raise ConfigError(
                f"Invalid receive buffer size: {self.receive_buffer_size}")

        if self.retry_interval < 0:
            raise ConfigError(f"Invalid retry interval: {self.retry_interval}")

        if self.connect_timeout < 0:
            raise ConfigError(f"Invalid connect timeout: {self.connect_timeout}")

        return True
