"""
Configuration management.

Provides the configuration models and a loader for files and environment
variables.
"""

from .models import ApplicationConfig, LoggingConfig, ServiceConfig
from .loader import ConfigLoader

__all__ = [
    "ApplicationConfig",
    "LoggingConfig",
    "ServiceConfig",
    "ConfigLoader",
]
