"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError, SyncDisabledError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .producthunt import PRODUCT_HUNT_API_URL, ProductHuntConfig, get_producthunt_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import DEFAULT_SYNC_LIMIT, MAX_SYNC_LIMIT, SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_SYNC_LIMIT",
    "MAX_SYNC_LIMIT",
    "PRODUCT_HUNT_API_URL",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ProductHuntConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "SyncDisabledError",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_database_config",
    "get_producthunt_config",
    "get_storage_config",
    "get_sync_config",
    "require_env_var",
    "require_env_vars",
]
