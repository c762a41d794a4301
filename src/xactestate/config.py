"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from xactestate.config import get_config

    config = get_config()
    db_path = config.database.path
    page_size = config.listings.page_size
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _get_project_root() -> Path:
    """Get the project root directory."""
    # config.py -> xactestate -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: str = field(default_factory=lambda: os.getenv(
        "XACT_DB_PATH",
        str(_get_project_root() / "xact_estate.db")
    ))

    def __post_init__(self):
        # Resolve relative paths
        if not os.path.isabs(self.path):
            self.path = str(_get_project_root() / self.path)


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "XACT_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: int(os.getenv(
        "XACT_API_PORT", "5000"
    )))
    debug: bool = field(default_factory=lambda: _env_bool("XACT_DEBUG", "false"))
    cors_origins: List[str] = field(default_factory=lambda: os.getenv(
        "XACT_CORS_ORIGINS", "*"
    ).split(","))

    def __post_init__(self):
        self.cors_origins = [o.strip() for o in self.cors_origins if o.strip()] or ["*"]


@dataclass
class FinanceConfig:
    """Mortgage and commission calculator defaults."""

    commission_rate: float = field(default_factory=lambda: float(os.getenv(
        "XACT_COMMISSION_RATE", "0.03"
    )))
    # Above this price the commission is open to negotiation
    negotiable_threshold: float = field(default_factory=lambda: float(os.getenv(
        "XACT_NEGOTIABLE_THRESHOLD", "2000000"
    )))
    default_down_payment_pct: float = 20.0
    default_loan_term_years: int = 25


@dataclass
class ListingsConfig:
    """Listing search configuration."""

    page_size: int = field(default_factory=lambda: int(os.getenv(
        "XACT_PAGE_SIZE", "12"
    )))
    max_page_size: int = field(default_factory=lambda: int(os.getenv(
        "XACT_MAX_PAGE_SIZE", "50"
    )))
    similar_count: int = 3
    placeholder_image: str = "/placeholder-property.svg"

    def __post_init__(self):
        if self.max_page_size < 1:
            self.max_page_size = 50
        self.page_size = max(1, min(self.page_size, self.max_page_size))


@dataclass
class RateLimitConfig:
    """Request rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_bool(
        "XACT_RATE_LIMIT_ENABLED", "true"
    ))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "XACT_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "XACT_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: APIConfig = field(default_factory=APIConfig)
    finance: FinanceConfig = field(default_factory=FinanceConfig)
    listings: ListingsConfig = field(default_factory=ListingsConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
