"""
Configuration Module

Provides centralized configuration management for the application.
"""

from .settings import (
    load_yaml_config,
    get_default_scan_directories,
    DatabaseConfig,
    ServerConfig,
    ScannerConfig,
    GitConfig,
    RescanConfig,
    LogConfig,
    get_settings,
    Settings,
)

from .logging_config import (
    LoggingConfig,
    log_print,
)

__all__ = [
    "load_yaml_config",
    "get_default_scan_directories",
    "DatabaseConfig",
    "ServerConfig",
    "ScannerConfig",
    "GitConfig",
    "RescanConfig",
    "LogConfig",
    "get_settings",
    "Settings",
    "LoggingConfig",
    "log_print",
]
