"""
Configuration Module

Provides centralized configuration management for the application.
Supports YAML config files.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List
from functools import lru_cache
from pydantic_settings import BaseSettings


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries. Override values take precedence.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config() -> Dict[str, Any]:
    """
    Load configuration from YAML files with local override support.

    Loading order:
    1. Load config.yaml (or config.example.yaml as fallback) as base configuration
    2. If config.local.yaml exists, merge it with base (local values override base)
    3. Return merged configuration

    Returns:
        Dictionary containing all configuration values
    """
    config_dir = Path(__file__).parent
    config_path = config_dir / "config.yaml"

    # Load base configuration
    if not config_path.exists():
        config_path = config_dir / "config.example.yaml"
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found. Please create {config_dir / 'config.yaml'} "
                f"based on {config_dir / 'config.example.yaml'}"
            )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            base_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration: {e}")

    # Load local configuration if exists
    local_config_path = config_dir / "config.local.yaml"
    if local_config_path.exists():
        try:
            with open(local_config_path, 'r', encoding='utf-8') as f:
                local_config = yaml.safe_load(f) or {}
            return deep_merge(base_config, local_config)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing local YAML configuration: {e}")

    return base_config


# Load configuration
_config = load_yaml_config()


# ============================================================================
# Database Configuration
# ============================================================================

class DatabaseConfig:
    """Database configuration management"""

    _db_config = _config.get("database", {})

    URL = _db_config.get("url", "sqlite+aiosqlite:///./data/barnacles.db")
    ECHO = _db_config.get("echo", False)

    @classmethod
    def get_async_database_url(cls) -> str:
        return os.environ.get("BARNACLES_DATABASE_URL") or cls.URL

    @classmethod
    def ensure_data_dir(cls):
        """Create the directory holding a file-based SQLite database"""
        url = cls.get_async_database_url()
        prefix = "sqlite+aiosqlite:///"
        if url.startswith(prefix) and ":memory:" not in url:
            Path(url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)


# ============================================================================
# Server Configuration
# ============================================================================

class ServerConfig:
    """Server configuration management"""

    _server_config = _config.get("server", {})

    HOST = _server_config.get("host", "127.0.0.1")
    PORT = _server_config.get("port", 8787)
    RELOAD = _server_config.get("reload", False)
    DEBUG = _server_config.get("debug", False)
    CORS_ORIGINS = _server_config.get("cors_origins", ["http://localhost:5173"])

    @classmethod
    def get_web_interface_url(cls) -> str:
        return f"http://{cls.HOST}:{cls.PORT}"


# ============================================================================
# Scanner Configuration
# ============================================================================

def get_default_scan_directories() -> List[str]:
    """Common development directories under the user's home"""
    home = Path.home()
    return [
        str(home / "Development"),
        str(home / "Projects"),
        str(home / "Code"),
        str(home / "workspace"),
        str(home / "Documents" / "Projects"),
    ]


class ScannerConfig:
    """Project discovery and file counting configuration"""

    _scanner_config = _config.get("scanner", {})

    DIRECTORIES = _scanner_config.get("directories") or get_default_scan_directories()
    MAX_DEPTH = _scanner_config.get("max_depth", 3)
    MAX_DEPTH_LIMIT = _scanner_config.get("max_depth_limit", 10)
    MAX_CONCURRENT_SCANS = _scanner_config.get("max_concurrent_scans", 8)
    SKIP_DIRECTORIES = _scanner_config.get("skip_directories", [
        "node_modules", ".git", "vendor", "dist", "build", ".next", ".nuxt",
        "__pycache__", "venv", ".venv", "target",
    ])
    IGNORE_FILES = _scanner_config.get("ignore_files", [
        ".DS_Store", "Thumbs.db", "desktop.ini", ".localized",
    ])
    RESPECT_GITIGNORE = _scanner_config.get("respect_gitignore", True)


# ============================================================================
# Git Configuration
# ============================================================================

class GitConfig:
    """Git inspection configuration"""

    _git_config = _config.get("git", {})

    # Seconds allowed for a single git command
    COMMAND_TIMEOUT = _git_config.get("command_timeout", 5)
    # Seconds allowed for reading one project's commit activity
    STATS_TIMEOUT = _git_config.get("stats_timeout", 30)
    # Commit authors counted by git stats, besides the global user.email
    AUTHOR_EMAILS = _git_config.get("author_emails") or []


# ============================================================================
# Rescan Configuration
# ============================================================================

class RescanConfig:
    """Periodic rescan configuration"""

    _rescan_config = _config.get("rescan", {})

    ENABLED = _rescan_config.get("enabled", False)
    INTERVAL_MINUTES = _rescan_config.get("interval_minutes", 30)
    INITIAL_DELAY_SECONDS = _rescan_config.get("initial_delay_seconds", 10)


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Log file configuration"""

    _log_config = _config.get("logging", {})

    LEVEL = _log_config.get("level", "INFO")
    LOG_DIR = _log_config.get("log_dir")
    FILE_NAME = _log_config.get("file_name", "barnacles")
    BACKUP_COUNT = _log_config.get("backup_count", 30)


# ============================================================================
# Pydantic Settings
# ============================================================================

class Settings(BaseSettings):
    """Application settings with validation"""

    # Application
    app_name: str = "Barnacles"
    debug: bool = ServerConfig.DEBUG

    # Database
    database_url: str = DatabaseConfig.get_async_database_url()

    # Scanner
    scan_directories: List[str] = ScannerConfig.DIRECTORIES
    scan_max_depth: int = ScannerConfig.MAX_DEPTH
    scan_max_depth_limit: int = ScannerConfig.MAX_DEPTH_LIMIT
    scan_max_concurrent: int = ScannerConfig.MAX_CONCURRENT_SCANS
    skip_directories: List[str] = ScannerConfig.SKIP_DIRECTORIES
    ignore_files: List[str] = ScannerConfig.IGNORE_FILES
    respect_gitignore: bool = ScannerConfig.RESPECT_GITIGNORE

    # Git
    git_command_timeout: float = GitConfig.COMMAND_TIMEOUT
    git_stats_timeout: float = GitConfig.STATS_TIMEOUT
    git_author_emails: List[str] = GitConfig.AUTHOR_EMAILS

    # Rescan
    rescan_enabled: bool = RescanConfig.ENABLED
    rescan_interval_minutes: float = RescanConfig.INTERVAL_MINUTES
    rescan_initial_delay_seconds: float = RescanConfig.INITIAL_DELAY_SECONDS

    # Server
    host: str = ServerConfig.HOST
    port: int = ServerConfig.PORT
    cors_origins: List[str] = ServerConfig.CORS_ORIGINS

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "BARNACLES_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    DatabaseConfig.ensure_data_dir()
    return Settings()


# ============================================================================
# Export all configs for easy import
# ============================================================================

__all__ = [
    "load_yaml_config",
    "get_default_scan_directories",
    "DatabaseConfig",
    "ServerConfig",
    "ScannerConfig",
    "GitConfig",
    "RescanConfig",
    "LogConfig",
    "Settings",
    "get_settings",
]
