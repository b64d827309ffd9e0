"""
Server configuration management.

This module handles loading and accessing server configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

Usage:
    from campaign_dealer.config import config

    # Access settings
    print(config.server.port)
    print(config.ai.provider)
    print(config.is_production)

Environment Variable Mapping:
    CAMPAIGN_HOST             -> server.host
    CAMPAIGN_PORT             -> server.port
    CAMPAIGN_PRODUCTION       -> security.production
    CAMPAIGN_CORS_ORIGINS     -> security.cors_origins
    CAMPAIGN_LOG_LEVEL        -> logging.level
    CAMPAIGN_AI_PROVIDER      -> ai.provider
    CAMPAIGN_AI_API_KEY       -> ai.api_key
    CAMPAIGN_AI_MODEL         -> ai.model
    CAMPAIGN_AI_OLLAMA_HOST   -> ai.ollama_host
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 8000


@dataclass
class SecuritySettings:
    """Security-related configuration."""

    production: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = field(default_factory=lambda: ["*"])
    docs_enabled: Literal["auto", "enabled", "disabled"] = "auto"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class AISettings:
    """
    Text-generation backend configuration.

    ``provider`` selects a factory from the provider registry.  Hosted
    providers need ``api_key``; the local Ollama backend needs
    ``ollama_host`` instead.  ``model`` overrides the provider's default
    model when set.  Empty strings are treated as "not configured".
    """

    provider: str = ""
    api_key: str = ""
    model: str = ""
    ollama_host: str = ""


@dataclass
class ServerConfig:
    """
    Complete server configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    ai: AISettings = field(default_factory=AISettings)

    @property
    def is_production(self) -> bool:
        """Convenience property for production mode check."""
        return self.security.production

    @property
    def docs_should_be_enabled(self) -> bool:
        """Determine if API docs should be enabled based on settings."""
        if self.security.docs_enabled == "enabled":
            return True
        if self.security.docs_enabled == "disabled":
            return False
        # "auto" - follow production setting
        return not self.is_production


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to list, stripping whitespace."""
    if not value or value.strip() == "":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "production"):
            cfg.security.production = _parse_bool(parser.get("security", "production"))
        if parser.has_option("security", "cors_origins"):
            cfg.security.cors_origins = _parse_list(parser.get("security", "cors_origins"))
        if parser.has_option("security", "cors_allow_credentials"):
            cfg.security.cors_allow_credentials = _parse_bool(
                parser.get("security", "cors_allow_credentials")
            )
        if parser.has_option("security", "cors_allow_methods"):
            cfg.security.cors_allow_methods = _parse_list(
                parser.get("security", "cors_allow_methods")
            )
        if parser.has_option("security", "cors_allow_headers"):
            cfg.security.cors_allow_headers = _parse_list(
                parser.get("security", "cors_allow_headers")
            )
        if parser.has_option("security", "docs_enabled"):
            val = parser.get("security", "docs_enabled").lower()
            if val in ("auto", "enabled", "disabled"):
                cfg.security.docs_enabled = val  # type: ignore[assignment]

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]

    # AI section
    if parser.has_section("ai"):
        if parser.has_option("ai", "provider"):
            cfg.ai.provider = parser.get("ai", "provider").strip().lower()
        if parser.has_option("ai", "api_key"):
            cfg.ai.api_key = parser.get("ai", "api_key").strip()
        if parser.has_option("ai", "model"):
            cfg.ai.model = parser.get("ai", "model").strip()
        if parser.has_option("ai", "ollama_host"):
            cfg.ai.ollama_host = parser.get("ai", "ollama_host").strip()


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings
    if env_host := os.getenv("CAMPAIGN_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("CAMPAIGN_PORT"):
        cfg.server.port = int(env_port)

    # Security settings
    if env_production := os.getenv("CAMPAIGN_PRODUCTION"):
        cfg.security.production = _parse_bool(env_production)
    if env_cors := os.getenv("CAMPAIGN_CORS_ORIGINS"):
        cfg.security.cors_origins = _parse_list(env_cors)

    # Logging settings
    if env_log := os.getenv("CAMPAIGN_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()

    # AI settings
    if env_provider := os.getenv("CAMPAIGN_AI_PROVIDER"):
        cfg.ai.provider = env_provider.strip().lower()
    if env_api_key := os.getenv("CAMPAIGN_AI_API_KEY"):
        cfg.ai.api_key = env_api_key.strip()
    if env_model := os.getenv("CAMPAIGN_AI_MODEL"):
        cfg.ai.model = env_model.strip()
    if env_ollama_host := os.getenv("CAMPAIGN_AI_OLLAMA_HOST"):
        cfg.ai.ollama_host = env_ollama_host.strip()


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


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information, useful for
    debugging.  The API key itself is never included, only whether one is set.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "production_mode": config.is_production,
        "cors_origins_count": len(config.security.cors_origins),
        "docs_enabled": config.docs_should_be_enabled,
        "ai_provider": config.ai.provider or None,
        "ai_model": config.ai.model or None,
        "ai_api_key_set": bool(config.ai.api_key),
        "ai_ollama_host": config.ai.ollama_host or None,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("SERVER CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:      {config.server.host}:{config.server.port}")
    print(f"Production:  {config.is_production}")
    print(f"CORS origins: {config.security.cors_origins}")
    print(f"Docs enabled: {config.docs_should_be_enabled}")
    print(f"Log level:   {config.logging.level}")
    print("-" * 60)
    print(f"AI provider: {status['ai_provider'] or '(not configured)'}")
    print(f"AI model:    {status['ai_model'] or '(provider default)'}")
    print(f"API key set: {status['ai_api_key_set']}")
    if status["ai_ollama_host"]:
        print(f"Ollama host: {status['ai_ollama_host']}")
    print("=" * 60 + "\n")


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_ai_settings:
    """
    Context manager for temporarily overriding the AI settings.

    Mirrors how tests swap configuration without touching the environment:
    the module-level ``config.ai`` is replaced on enter and restored on exit.

    Usage:
        from campaign_dealer.config import AISettings, use_ai_settings

        def test_something():
            with use_ai_settings(AISettings(provider="ollama", ollama_host="http://x")):
                ...

    Args:
        settings: The AISettings to install for the duration of the block.
    """

    def __init__(self, settings: AISettings):
        self.settings = settings
        self.original: AISettings | None = None

    def __enter__(self) -> AISettings:
        """Install the override settings."""
        self.original = config.ai
        config.ai = self.settings
        return self.settings

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Restore original AI settings."""
        if self.original is not None:
            config.ai = self.original
        return None
