"""
Server configuration management.

This module handles loading and accessing configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

The ``[agiml]`` section is kept as raw string overrides and turned into a
frozen :class:`~agiml_bridge.agiml.settings.AgimlSettings` on demand, so the
transform itself never sees mutable configuration.

Usage:
    from agiml_bridge.config import config

    print(config.server.port)
    settings = config.agiml_settings()

Environment Variable Mapping:
    AGIML_HOST         -> server.host
    AGIML_PORT         -> server.port
    AGIML_LOG_LEVEL    -> logging.level
    AGIML_LOG_FORMAT   -> logging.format
    AGIML_ENDPOINT     -> agiml.endpoint
    AGIML_SPEC_FOLDER  -> agiml.spec_folder
    AGIML_SPEC         -> agiml.spec_name
"""

import configparser
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from agiml_bridge.agiml.settings import AgimlSettings

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"

LOG_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
}


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed", "json"] = "detailed"


@dataclass
class ServerConfig:
    """
    Complete configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    agiml: dict[str, str] = field(default_factory=dict)

    def agiml_settings(self, overrides: dict[str, Any] | None = None) -> AgimlSettings:
        """Build frozen AGIML settings from the ``[agiml]`` section.

        *overrides* (for example a ``--settings`` YAML file) take precedence
        over the config file and environment.
        """
        merged: dict[str, Any] = dict(self.agiml)
        merged.update(overrides or {})
        return AgimlSettings.from_dict(merged)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed", "json"):
                cfg.logging.format = val  # type: ignore[assignment]

    # AGIML section - every option is passed through, unknown ones included
    if parser.has_section("agiml"):
        cfg.agiml.update(dict(parser.items("agiml")))


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings
    if env_host := os.getenv("AGIML_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("AGIML_PORT"):
        cfg.server.port = int(env_port)

    # Logging settings
    if env_log := os.getenv("AGIML_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_format := os.getenv("AGIML_LOG_FORMAT"):
        if env_format.lower() in ("simple", "detailed", "json"):
            cfg.logging.format = env_format.lower()  # type: ignore[assignment]

    # AGIML settings
    if env_endpoint := os.getenv("AGIML_ENDPOINT"):
        cfg.agiml["endpoint"] = env_endpoint
    if env_folder := os.getenv("AGIML_SPEC_FOLDER"):
        cfg.agiml["spec_folder"] = env_folder
    if env_spec := os.getenv("AGIML_SPEC"):
        cfg.agiml["spec_name"] = env_spec


def load_config() -> ServerConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ServerConfig: Fully populated configuration object.
    """
    cfg = ServerConfig()

    # Determine which config file to use
    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        # Use example as fallback for development
        config_file = CONFIG_EXAMPLE

    # Load from INI file if available
    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "ServerConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Middleware instances
    that were already built keep their settings.

    Returns:
        ServerConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# LOGGING
# =============================================================================


class JsonLogFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Install a root log handler according to *settings*.

    Replaces handlers installed by a previous call so the CLI can be invoked
    repeatedly in one process (tests).
    """
    settings = settings or config.logging
    handler = logging.StreamHandler()
    if settings.format == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMATS[settings.format]))

    logging.basicConfig(level=settings.level, handlers=[handler], force=True)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information,
    useful for debugging.
    """
    settings = config.agiml_settings()
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "endpoint": settings.endpoint,
        "spec_name": settings.spec_name,
        "spec_folder": settings.spec_folder or "(bundled)",
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("AGIML BRIDGE CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:      {config.server.host}:{config.server.port}")
    print(f"Log level:   {config.logging.level} ({config.logging.format})")
    print(f"Endpoint:    {status['endpoint']}")
    print(f"Spec:        {status['spec_name']} from {status['spec_folder']}")
    print("=" * 60 + "\n")
